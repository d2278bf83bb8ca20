"""Test doubles shared across test modules."""

from typing import Any, Dict, List, Optional

from paygate.codec.xml_codec import encode
from paygate.models.params import SIGN_FIELD, ParameterMap
from paygate.signing.signer import sign
from paygate.transport.base import Credential, Transport

SECRET = "192006250b4c09247ec02edce69f6a2"


def signed_body(fields: Dict[str, Any], secret: str = SECRET) -> bytes:
    """Encode ``fields`` the way the gateway would, with a valid signature."""
    params = ParameterMap(fields)
    return encode(params.merged({SIGN_FIELD: sign(params, secret)}))


class StubTransport(Transport):
    """Returns a canned body (or raises) and records what was sent."""

    def __init__(self, body: bytes = b"", error: Optional[BaseException] = None):
        self._body = body
        self._error = error
        self.sent: List[Dict[str, Any]] = []

    async def send(
        self,
        url: str,
        body: bytes,
        credential: Optional[Credential] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        self.sent.append({"url": url, "body": body, "credential": credential, "timeout": timeout})
        if self._error is not None:
            raise self._error
        return self._body
