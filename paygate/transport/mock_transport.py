"""
Simulated gateway for tests and local development.

Behaves like the real XML API from the client's point of view:
  - Decodes and signature-checks every request
  - Answers with a signed ``<xml>`` document
  - Can be told to report a business failure, to fail at the network
    level, or to tamper with its own signature
  - Optional latency

Every request it receives is recorded in ``calls`` for assertions.
"""

import asyncio
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from paygate.codec.xml_codec import decode, encode
from paygate.exceptions import ProtocolError
from paygate.models.params import SIGN_FIELD, ParameterMap
from paygate.signing.signer import sign, verify
from paygate.transport.base import Credential, Transport

OUTCOME_SUCCESS = "success"
OUTCOME_BUSINESS_ERROR = "business_error"
OUTCOME_NETWORK_ERROR = "network_error"

# Request fields the gateway echoes back in its response
_ECHOED_FIELDS = ("appid", "mch_id", "out_trade_no", "transaction_id", "total_fee")


@dataclass
class MockCall:
    """One request as seen by the simulated gateway."""

    url: str
    params: ParameterMap
    credential: Optional[Credential]
    timeout: Optional[float]


class MockGatewayTransport(Transport):
    """Signed in-process stand-in for the gateway's HTTPS endpoint."""

    def __init__(
        self,
        secret: str,
        outcome: str = OUTCOME_SUCCESS,
        latency_ms: int = 0,
        tamper: bool = False,
        extra_fields: Optional[Dict[str, Any]] = None,
    ):
        self._secret = secret
        self._outcome = outcome
        self._latency_ms = latency_ms
        self._tamper = tamper
        self._extra_fields = dict(extra_fields or {})
        self.calls: List[MockCall] = []

    async def send(
        self,
        url: str,
        body: bytes,
        credential: Optional[Credential] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        if self._latency_ms > 0:
            await asyncio.sleep(self._latency_ms / 1000)

        request = decode(body)
        self.calls.append(MockCall(url=url, params=request, credential=credential, timeout=timeout))

        if self._outcome == OUTCOME_NETWORK_ERROR:
            raise ProtocolError(f"Mock gateway unreachable: {url}")

        fields: Dict[str, Any] = {
            key: request[key] for key in _ECHOED_FIELDS if key in request
        }
        fields["nonce_str"] = uuid.uuid4().hex

        if not verify(request, self._secret, request.text(SIGN_FIELD)):
            fields.update(return_code="FAIL", return_msg="签名错误")
        elif self._outcome == OUTCOME_BUSINESS_ERROR:
            fields.update(
                return_code="SUCCESS",
                return_msg="OK",
                result_code="FAIL",
                err_code="ORDERPAID",
                err_code_des="该订单已支付",
            )
        else:
            fields.update(
                return_code="SUCCESS",
                return_msg="OK",
                result_code="SUCCESS",
                prepay_id=f"wx{uuid.uuid4().hex[:30]}",
            )

        fields.update(self._extra_fields)
        response = ParameterMap(fields)

        signature = sign(response, self._secret)
        if self._tamper:
            signature = signature[::-1]

        return encode(response.merged({SIGN_FIELD: signature}))
