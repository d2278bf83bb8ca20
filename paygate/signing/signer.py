"""
MD5 request/response signatures.

The gateway signs ``canonical + "&key=" + secret`` with MD5 and compares
uppercase hex digests. MD5 is weak, but the counterparty verifies exactly
this digest; switching algorithms breaks interop with the provider.
"""

import hashlib
import hmac
from typing import Any, Optional

from paygate.exceptions import ConfigurationError
from paygate.signing.canonical import canonicalize


def sign(params: Any, secret: Optional[str]) -> str:
    """
    Compute the uppercase hex signature for a parameter map.

    Raises:
        ConfigurationError: If the secret is missing or empty.
    """
    if not secret:
        raise ConfigurationError("Missing gateway config -- [secret_key]")

    payload = f"{canonicalize(params)}&key={secret}"
    return hashlib.md5(payload.encode("utf-8")).hexdigest().upper()


def verify(params: Any, secret: Optional[str], candidate: Optional[str]) -> bool:
    """
    Check ``candidate`` against the signature recomputed over ``params``.

    The ``sign`` field inside ``params`` is ignored by canonicalization, so
    a decoded response can be passed as-is. Comparison is case-sensitive
    and constant-time.
    """
    if not candidate:
        return False
    expected = sign(params, secret)
    return hmac.compare_digest(expected.encode("ascii"), candidate.encode("utf-8"))
