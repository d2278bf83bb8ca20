"""Result of a single gateway call."""

from dataclasses import dataclass, field
from typing import Optional

from paygate.exceptions import GatewayError
from paygate.models.enums import ResultStatus
from paygate.models.params import ParameterMap


@dataclass(frozen=True)
class ApiResult:
    """
    Either a verified response map (SUCCEEDED) or a typed failure.

    ``payload`` is the decoded response whenever one was received. For a
    SIGNATURE_ERROR it is untrusted and only useful for diagnostics.
    """

    status: ResultStatus
    payload: ParameterMap = field(default_factory=ParameterMap)
    error: Optional[GatewayError] = None

    @classmethod
    def success(cls, payload: ParameterMap) -> "ApiResult":
        return cls(status=ResultStatus.SUCCEEDED, payload=payload)

    @classmethod
    def failure(cls, error: GatewayError) -> "ApiResult":
        payload = error.payload if isinstance(error.payload, ParameterMap) else ParameterMap()
        return cls(status=error.status, payload=payload, error=error)

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.SUCCEEDED

    @property
    def message(self) -> str:
        return self.error.message if self.error is not None else ""

    def unwrap(self) -> ParameterMap:
        """Return the payload, raising the carried error for any failure."""
        if self.error is not None:
            raise self.error
        return self.payload
