"""
Gateway API client: the request/response pipeline.

One call runs through these stages, each producing a new value:

  1. Build     merge protocol fields (appid, mch_id, nonce_str) and sign
  2. Encode    ParameterMap -> <xml> body
  3. Send      transport POST, optionally with a client certificate
  4. Decode    response body -> ParameterMap
  5. Verify    recompute the response signature; mismatch fails closed
  6. Classify  return_code / result_code -> success or business error

Verification always runs before classification: a response claiming
success with a bad signature is a SignatureError, never a success.

The client keeps no mutable state. Settings are frozen and shared, the
transport and logger are injected, and nothing is retried here.
"""

import logging
import uuid
from typing import Any, Optional

from paygate.audit.logger import GatewayLogger
from paygate.codec.xml_codec import decode, encode
from paygate.config import Settings
from paygate.exceptions import (
    BusinessError,
    ConfigurationError,
    GatewayError,
    InvalidArgumentError,
    ProtocolError,
    SignatureError,
)
from paygate.models.params import SIGN_FIELD, ParameterMap
from paygate.models.result import ApiResult
from paygate.signing.signer import sign, verify
from paygate.transport.base import Credential, Transport

logger = logging.getLogger("paygate.client")

SUCCESS = "SUCCESS"


def _nonce() -> str:
    """32-character random string, the gateway's maximum nonce length."""
    return uuid.uuid4().hex


def _business_error(response: ParameterMap) -> BusinessError:
    return_msg = response.text("return_msg")
    err_code = response.text("err_code")
    err_code_des = response.text("err_code_des")

    details = [
        f"{label}={value}"
        for label, value in (
            ("return_msg", return_msg),
            ("err_code", err_code),
            ("err_code_des", err_code_des),
        )
        if value
    ]
    message = "Gateway API error"
    if details:
        message = f"{message}: {'; '.join(details)}"

    return BusinessError(
        message,
        payload=response,
        return_code=response.text("return_code"),
        return_msg=return_msg,
        result_code=response.text("result_code"),
        err_code=err_code,
        err_code_des=err_code_des,
    )


class ApiClient:
    """
    Signed XML-over-HTTPS client for the payment gateway.

    Args:
        settings: Frozen gateway settings (base URI, secret, merchant ids).
        transport: Network capability used for every call.
        audit: Trace sink for outgoing requests and signature failures.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Transport,
        audit: Optional[GatewayLogger] = None,
    ):
        self._settings = settings
        self._transport = transport
        self._audit = audit or GatewayLogger()

    @property
    def settings(self) -> Settings:
        return self._settings

    def endpoint_url(self, endpoint: str) -> str:
        return self._settings.endpoint_url(endpoint)

    def _secret(self, secret: Optional[str]) -> str:
        resolved = secret if secret is not None else self._settings.secret_key
        if not resolved:
            raise ConfigurationError("Missing gateway config -- [secret_key]")
        return resolved

    def build_request(self, params: Any, secret: Optional[str] = None) -> ParameterMap:
        """
        Add protocol fields and the signature to caller parameters.

        ``appid`` and ``mch_id`` come from settings when configured and not
        already supplied; ``nonce_str`` is generated when absent. Any
        ``sign`` passed in is replaced.

        Raises:
            ConfigurationError: If no secret is available.
            InvalidArgumentError: If ``params`` is empty or not a valid mapping.
        """
        resolved_secret = self._secret(secret)
        request = ParameterMap.of(params)
        if len(request) == 0:
            raise InvalidArgumentError("Request parameters must not be empty")

        defaults = {}
        if self._settings.app_id and "appid" not in request:
            defaults["appid"] = self._settings.app_id
        if self._settings.mch_id and "mch_id" not in request:
            defaults["mch_id"] = self._settings.mch_id
        if "nonce_str" not in request:
            defaults["nonce_str"] = _nonce()
        if defaults:
            request = request.merged(defaults)

        return request.merged({SIGN_FIELD: sign(request, resolved_secret)})

    async def call(
        self,
        endpoint: str,
        params: Any,
        *,
        secret: Optional[str] = None,
        credential: Optional[Credential] = None,
        timeout: Optional[float] = None,
    ) -> ApiResult:
        """
        Run one request through the full pipeline.

        Args:
            endpoint: Path component, e.g. ``"pay/unifiedorder"``.
            params: Request fields (ParameterMap or plain mapping).
            secret: Signing key; defaults to ``settings.secret_key``.
            credential: Client certificate for mutual-TLS endpoints; defaults
                to the one configured in settings, if any.
            timeout: Per-call timeout handed to the transport unchanged.

        Returns:
            ApiResult. Every gateway failure (configuration, invalid
            argument, protocol, signature, business) comes back as a
            failed result carrying the typed error; other exceptions,
            including cancellation, propagate.
        """
        try:
            payload = await self._execute(endpoint, params, secret, credential, timeout)
        except GatewayError as e:
            logger.info("Gateway call to %s ended with %s: %s", endpoint, e.status.value, e)
            return ApiResult.failure(e)
        return ApiResult.success(payload)

    async def request(self, endpoint: str, params: Any, **kwargs: Any) -> ParameterMap:
        """Like ``call`` but returns the verified payload or raises the error."""
        result = await self.call(endpoint, params, **kwargs)
        return result.unwrap()

    def verify_notification(self, body: Any, secret: Optional[str] = None) -> ParameterMap:
        """
        Decode and authenticate an asynchronous gateway notification.

        Only the signature is checked; whether the notified payment
        succeeded is for the caller to read from the returned map.

        Raises:
            ConfigurationError: If no secret is available.
            InvalidArgumentError: If the body is empty.
            ProtocolError: If the body is not acceptable XML.
            SignatureError: If the notification signature does not match.
        """
        resolved_secret = self._secret(secret)
        notification = decode(body)
        self._check_signature(notification, resolved_secret, "Notification")
        return notification

    async def _execute(
        self,
        endpoint: str,
        params: Any,
        secret: Optional[str],
        credential: Optional[Credential],
        timeout: Optional[float],
    ) -> ParameterMap:
        resolved_secret = self._secret(secret)
        if credential is None:
            credential = self._settings.credential()

        request = self.build_request(params, resolved_secret)
        body = encode(request)

        url = self.endpoint_url(endpoint)
        self._audit.debug("Request to gateway API", {"url": url, "params": request.to_dict()})

        try:
            raw = await self._transport.send(url, body, credential=credential, timeout=timeout)
        except OSError as e:
            raise ProtocolError(f"Transport failure calling {url}: {e}") from e

        response = decode(raw)
        self._check_signature(response, resolved_secret, "Response")

        if response.text("return_code") == SUCCESS and response.text("result_code") == SUCCESS:
            return response

        raise _business_error(response)

    def _check_signature(self, params: ParameterMap, secret: str, what: str) -> None:
        if not verify(params, secret, params.text(SIGN_FIELD)):
            self._audit.warning(f"{what} sign verify FAILED", params)
            raise SignatureError(f"{what} sign verify FAILED", payload=params)
