from paygate.signing.canonical import canonicalize
from paygate.signing.signer import sign, verify

__all__ = ["canonicalize", "sign", "verify"]
