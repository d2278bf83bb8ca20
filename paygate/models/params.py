"""
Tagged parameter model shared by the signer, the XML codec and the client.

The gateway protocol only knows flat name/value pairs, where a value is
either a number or a piece of text. Decoding a response can still produce
nested or repeated elements, so a third COMPOSITE kind exists for those;
composite values are never part of the signing input.

A ParameterMap is immutable. Each pipeline stage (build, sign, decode)
produces a new map via ``merged``/``without`` instead of editing one.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterator, Optional

from paygate.exceptions import InvalidArgumentError
from paygate.models.enums import ValueKind

SIGN_FIELD = "sign"


@dataclass(frozen=True)
class ParamValue:
    """A single tagged parameter value."""

    kind: ValueKind
    value: Any  # str for TEXT, int/float/Decimal for NUMBER, ParameterMap or tuple for COMPOSITE

    @classmethod
    def of(cls, value: Any) -> "ParamValue":
        """Wrap a plain Python value, inferring its kind."""
        if isinstance(value, ParamValue):
            return value
        # bool is an int subclass; the protocol has no boolean type
        if isinstance(value, bool):
            raise InvalidArgumentError("Boolean parameter values are not supported")
        if value is None:
            return cls(ValueKind.TEXT, "")
        if isinstance(value, (int, float, Decimal)):
            if isinstance(value, float) and not math.isfinite(value):
                raise InvalidArgumentError(f"Non-finite number is not a valid parameter: {value}")
            if isinstance(value, Decimal) and not value.is_finite():
                raise InvalidArgumentError(f"Non-finite number is not a valid parameter: {value}")
            return cls(ValueKind.NUMBER, value)
        if isinstance(value, str):
            return cls(ValueKind.TEXT, value)
        if isinstance(value, Mapping):
            return cls(ValueKind.COMPOSITE, ParameterMap.of(value))
        if isinstance(value, (list, tuple)):
            return cls(ValueKind.COMPOSITE, tuple(cls.of(item) for item in value))
        raise InvalidArgumentError(f"Unsupported parameter value type: {type(value).__name__}")

    @property
    def is_scalar(self) -> bool:
        return self.kind is not ValueKind.COMPOSITE

    def text(self) -> str:
        """Textual form used for signing and XML emission."""
        if not self.is_scalar:
            raise InvalidArgumentError("Composite values have no text form")
        # Integral floats print without ".0", the way PHP renders them
        if isinstance(self.value, float) and self.value.is_integer() and abs(self.value) < 1e15:
            return str(int(self.value))
        return str(self.value)

    def to_python(self) -> Any:
        if self.kind is ValueKind.COMPOSITE:
            if isinstance(self.value, ParameterMap):
                return self.value.to_dict()
            return [item.to_python() for item in self.value]
        return self.value


class ParameterMap(Mapping):
    """Immutable mapping of field name to ParamValue."""

    __slots__ = ("_fields",)

    def __init__(self, fields: Optional[Mapping] = None):
        self._fields: Dict[str, ParamValue] = {}
        for key, value in (fields or {}).items():
            if not isinstance(key, str) or not key:
                raise InvalidArgumentError(f"Parameter names must be non-empty strings, got {key!r}")
            self._fields[key] = ParamValue.of(value)

    @classmethod
    def of(cls, params: Any) -> "ParameterMap":
        """Accept a ParameterMap as-is or wrap any other mapping."""
        if isinstance(params, ParameterMap):
            return params
        if not isinstance(params, Mapping):
            raise InvalidArgumentError(f"Expected a mapping of parameters, got {type(params).__name__}")
        return cls(params)

    def __getitem__(self, key: str) -> ParamValue:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"ParameterMap({self.to_dict()!r})"

    def text(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Text of a scalar field, or ``default`` if absent or composite."""
        value = self._fields.get(key)
        if value is None or not value.is_scalar:
            return default
        return value.text()

    def merged(self, fields: Mapping) -> "ParameterMap":
        """New map with ``fields`` added, replacing existing names."""
        combined: Dict[str, Any] = dict(self._fields)
        combined.update(ParameterMap.of(fields)._fields)
        return ParameterMap(combined)

    def without(self, *keys: str) -> "ParameterMap":
        return ParameterMap({k: v for k, v in self._fields.items() if k not in keys})

    def to_dict(self) -> Dict[str, Any]:
        """Plain Python view: numbers stay numbers, composites become dicts/lists."""
        return {key: value.to_python() for key, value in self._fields.items()}
