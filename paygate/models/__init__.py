from paygate.models.enums import ResultStatus, ValueKind

__all__ = ["ResultStatus", "ValueKind"]
