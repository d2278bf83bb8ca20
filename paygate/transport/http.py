"""
HTTPS transport backed by httpx.

Each call opens a short-lived AsyncClient so that the client certificate
(when one is supplied) is scoped to that call only. Connection reuse,
retries and proxies beyond httpx's defaults are the caller's concern.
"""

import asyncio
import logging
import ssl
from typing import Optional, Union

import httpx

from paygate.config import Settings
from paygate.exceptions import ConfigurationError, ProtocolError
from paygate.transport.base import Credential, Transport

logger = logging.getLogger("paygate.transport")


class HttpxTransport(Transport):
    """
    POSTs XML bodies to the gateway.

    ``transport`` lets tests mount an ``httpx.MockTransport`` instead of
    the network.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings
        self._transport = transport
        self._headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "User-Agent": settings.user_agent,
        }

    def _load_ssl_context(self, credential: Credential) -> ssl.SSLContext:
        context = ssl.create_default_context()
        try:
            context.load_cert_chain(certfile=credential.cert_path, keyfile=credential.key_path)
        except OSError as e:
            # ssl.SSLError is an OSError too: unreadable or mismatched PEM files
            raise ConfigurationError(f"Unable to load client certificate: {e}") from e
        return context

    async def send(
        self,
        url: str,
        body: bytes,
        credential: Optional[Credential] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        verify: Union[bool, ssl.SSLContext] = True
        if credential is not None:
            # Reading the PEM files blocks; keep it off the event loop
            verify = await asyncio.to_thread(self._load_ssl_context, credential)
        effective_timeout = timeout if timeout is not None else self._settings.timeout

        logger.debug(
            "POST %s (%d bytes, mtls=%s, timeout=%.1fs)",
            url,
            len(body),
            credential is not None,
            effective_timeout,
        )

        try:
            async with httpx.AsyncClient(
                verify=verify,
                timeout=effective_timeout,
                headers=self._headers,
                transport=self._transport,
            ) as client:
                response = await client.post(url, content=body)
        except httpx.TimeoutException as e:
            raise ProtocolError(f"Gateway request timed out after {effective_timeout}s: {url}") from e
        except httpx.HTTPError as e:
            raise ProtocolError(f"Gateway request failed: {e}") from e
        except ssl.SSLError as e:
            raise ProtocolError(f"TLS failure talking to gateway: {e}") from e

        if not response.is_success:
            raise ProtocolError(
                f"Gateway returned HTTP {response.status_code} for {url}",
                status_code=response.status_code,
            )

        return response.content
