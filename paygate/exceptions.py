"""
Gateway error hierarchy.

Every failure the adapter can report carries a ResultStatus so the client
can fold it into an ApiResult, plus the decoded response payload where one
exists (for diagnostics only). Nothing here is retried internally; the
``retriable`` flag tells the caller whether wrapping the call in its own
retry loop makes sense.
"""

from typing import Any, Dict, Optional

from paygate.models.enums import ResultStatus


class GatewayError(Exception):
    """Base exception for all gateway adapter errors."""

    status = ResultStatus.PROTOCOL_ERROR

    def __init__(self, message: str, payload: Any = None, retriable: bool = False):
        super().__init__(message)
        self.message = message
        self.payload = payload
        self.retriable = retriable

    def to_dict(self) -> Dict[str, Any]:
        """Structured form for logging and audit records."""
        payload = self.payload
        if payload is not None and hasattr(payload, "to_dict"):
            payload = payload.to_dict()
        return {
            "status": self.status.value,
            "message": self.message,
            "retriable": self.retriable,
            "payload": payload,
        }


class ConfigurationError(GatewayError):
    """Required secret or credential material is missing."""

    status = ResultStatus.CONFIGURATION_ERROR


class InvalidArgumentError(GatewayError, ValueError):
    """Malformed input to the codec or parameter model (caller bug)."""

    status = ResultStatus.INVALID_ARGUMENT


class ProtocolError(GatewayError):
    """Transport, TLS, HTTP status or wire-format failure."""

    status = ResultStatus.PROTOCOL_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message, payload=payload, retriable=True)
        self.status_code = status_code


class SignatureError(GatewayError):
    """Response signature did not verify. The payload is untrusted."""

    status = ResultStatus.SIGNATURE_ERROR


class BusinessError(GatewayError):
    """The gateway returned a correctly signed but unsuccessful outcome."""

    status = ResultStatus.BUSINESS_ERROR

    def __init__(
        self,
        message: str,
        payload: Any = None,
        return_code: Optional[str] = None,
        return_msg: Optional[str] = None,
        result_code: Optional[str] = None,
        err_code: Optional[str] = None,
        err_code_des: Optional[str] = None,
    ):
        super().__init__(message, payload=payload)
        self.return_code = return_code
        self.return_msg = return_msg
        self.result_code = result_code
        self.err_code = err_code
        self.err_code_des = err_code_des
