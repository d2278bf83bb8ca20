"""Signed XML-over-HTTPS client for the WeChat Pay style gateway API."""

from paygate.models.enums import ResultStatus, ValueKind
from paygate.models.params import SIGN_FIELD, ParameterMap, ParamValue
from paygate.exceptions import (
    BusinessError,
    ConfigurationError,
    GatewayError,
    InvalidArgumentError,
    ProtocolError,
    SignatureError,
)
from paygate.models.result import ApiResult
from paygate.signing import canonicalize, sign, verify
from paygate.codec.xml_codec import decode, encode
from paygate.transport.base import Credential, Transport
from paygate.config import Settings, get_settings
from paygate.audit.logger import GatewayLogger, configure_logging
from paygate.transport.http import HttpxTransport
from paygate.engine.client import ApiClient

__all__ = [
    "SIGN_FIELD",
    "ApiClient",
    "ApiResult",
    "BusinessError",
    "ConfigurationError",
    "Credential",
    "GatewayError",
    "GatewayLogger",
    "HttpxTransport",
    "InvalidArgumentError",
    "ParamValue",
    "ParameterMap",
    "ProtocolError",
    "ResultStatus",
    "Settings",
    "SignatureError",
    "Transport",
    "ValueKind",
    "canonicalize",
    "configure_logging",
    "decode",
    "encode",
    "get_settings",
    "sign",
    "verify",
]
