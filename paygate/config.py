"""Gateway configuration via environment variables."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings

from paygate.exceptions import ConfigurationError
from paygate.transport.base import Credential


class Settings(BaseSettings):
    base_uri: str = "https://api.mch.weixin.qq.com/"
    secret_key: str = ""  # Merchant API key used for MD5 signing
    app_id: Optional[str] = None
    mch_id: Optional[str] = None
    cert_client: Optional[str] = None  # PEM client certificate for mutual TLS endpoints
    cert_key: Optional[str] = None
    timeout: float = 10.0  # Seconds, applied by the HTTP transport
    user_agent: str = "paygate/0.1.0"
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "PAYGATE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "frozen": True,
    }

    def credential(self) -> Optional[Credential]:
        """
        Client certificate pair, or None when mutual TLS is not configured.

        Raises:
            ConfigurationError: If only one of cert_client/cert_key is set.
        """
        if not self.cert_client and not self.cert_key:
            return None
        if not self.cert_client or not self.cert_key:
            raise ConfigurationError("Missing gateway config -- [cert_client] and [cert_key] are both required")
        return Credential(cert_path=self.cert_client, key_path=self.cert_key)

    def endpoint_url(self, endpoint: str) -> str:
        return f"{self.base_uri.rstrip('/')}/{endpoint.lstrip('/')}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, built once on first use and never mutated."""
    return Settings()
