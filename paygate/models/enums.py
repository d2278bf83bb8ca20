"""Enumerations for the gateway adapter's data model."""

from enum import Enum


class ValueKind(str, Enum):
    """Tag carried by every value inside a ParameterMap."""

    NUMBER = "number"
    TEXT = "text"
    COMPOSITE = "composite"


class ResultStatus(str, Enum):
    """Outcome of a single gateway call."""

    SUCCEEDED = "succeeded"
    BUSINESS_ERROR = "business_error"
    PROTOCOL_ERROR = "protocol_error"
    SIGNATURE_ERROR = "signature_error"
    CONFIGURATION_ERROR = "configuration_error"
    INVALID_ARGUMENT = "invalid_argument"
