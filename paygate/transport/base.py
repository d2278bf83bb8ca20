"""
Abstract transport interface.

The API client only needs one capability from the network layer: POST a
body to a URL, optionally presenting a client certificate, and hand back
the raw response bytes. The default implementation wraps httpx; tests use
the simulated gateway in ``mock_transport``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from paygate.exceptions import ConfigurationError


@dataclass(frozen=True)
class Credential:
    """Client certificate and private key for mutual-TLS endpoints."""

    cert_path: str  # PEM certificate (apiclient_cert.pem)
    key_path: str  # PEM private key (apiclient_key.pem)

    def __post_init__(self):
        if not self.cert_path or not self.key_path:
            raise ConfigurationError("Missing gateway config -- [cert_client] and [cert_key] are both required")


class Transport(ABC):
    """Abstract base class for gateway transports."""

    @abstractmethod
    async def send(
        self,
        url: str,
        body: bytes,
        credential: Optional[Credential] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """
        POST ``body`` to ``url`` and return the raw response body.

        A ``credential`` means the call must use mutual TLS with that
        certificate pair; without one, a standard TLS client call is made.
        ``timeout`` overrides the transport's default for this call only.

        Raises:
            ProtocolError: On network, TLS or HTTP status failure.
            ConfigurationError: If the credential files cannot be loaded.
        """
        ...
