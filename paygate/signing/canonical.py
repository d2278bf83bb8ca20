"""
Canonical signing input for gateway parameter maps.

Fields are sorted by name (UTF-8 byte order) and joined as
``name=value`` pairs separated by ``&``. Skipped entirely:
  - the ``sign`` field itself
  - empty text values
  - composite (nested or repeated) values

The canonical string is only ever hashed, never sent.
"""

from typing import Any

from paygate.models.params import SIGN_FIELD, ParameterMap


def canonicalize(params: Any) -> str:
    """
    Build the canonical ``key=value&...`` string for a parameter map.

    Args:
        params: A ParameterMap or any plain mapping of scalar values.

    Returns:
        The joined string, or ``""`` when every field was filtered out.
    """
    fields = ParameterMap.of(params)

    parts = []
    for key in sorted(fields, key=lambda name: name.encode("utf-8")):
        value = fields[key]
        if key == SIGN_FIELD or not value.is_scalar:
            continue
        text = value.text()
        if text == "":
            continue
        parts.append(f"{key}={text}")

    return "&".join(parts)
