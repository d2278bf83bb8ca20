"""Tests for MD5 signing and verification."""

import pytest

from paygate.exceptions import ConfigurationError
from paygate.signing.signer import sign, verify

SECRET = "192006250b4c09247ec02edce69f6a2"
ORDER = {"out_trade_no": "1217752501201407033233368018", "total_fee": "100"}


class TestSign:
    def test_known_signature(self):
        assert sign(ORDER, SECRET) == "A4FACB8AD07853EB49B29CE8C7205AFC"

    def test_deterministic(self):
        assert sign(ORDER, SECRET) == sign(dict(reversed(list(ORDER.items()))), SECRET)

    def test_uppercase_hex(self):
        signature = sign(ORDER, SECRET)
        assert len(signature) == 32
        assert signature == signature.upper()

    def test_numeric_and_text_forms_agree(self):
        assert sign({"out_trade_no": ORDER["out_trade_no"], "total_fee": 100}, SECRET) == sign(ORDER, SECRET)

    def test_utf8_values(self):
        params = {"appid": "wx2421b1c4370ec43b", "body": "测试", "mch_id": "10000100", "total_fee": 1}
        assert sign(params, SECRET) == "4C041040B53689F60F62AE5F2B2A241C"

    def test_empty_canonical_form(self):
        assert sign({}, SECRET) == "EC9CAF33C018C4EBED7927A8ABBCA82E"

    def test_existing_sign_field_ignored(self):
        assert sign({**ORDER, "sign": "WHATEVER"}, SECRET) == sign(ORDER, SECRET)

    def test_value_change_changes_signature(self):
        assert sign({**ORDER, "total_fee": "101"}, SECRET) != sign(ORDER, SECRET)

    def test_secret_change_changes_signature(self):
        assert sign(ORDER, SECRET + "x") != sign(ORDER, SECRET)

    @pytest.mark.parametrize("secret", [None, ""])
    def test_missing_secret(self, secret):
        with pytest.raises(ConfigurationError):
            sign(ORDER, secret)


class TestVerify:
    def test_valid_signature(self):
        signed = {**ORDER, "sign": sign(ORDER, SECRET)}
        assert verify(signed, SECRET, signed["sign"]) is True

    def test_single_character_mutation(self):
        signature = sign(ORDER, SECRET)
        tampered = {**ORDER, "out_trade_no": ORDER["out_trade_no"][:-1] + "9"}
        assert verify(tampered, SECRET, signature) is False

    def test_case_sensitive(self):
        assert verify(ORDER, SECRET, sign(ORDER, SECRET).lower()) is False

    def test_wrong_secret(self):
        assert verify(ORDER, "another-key", sign(ORDER, SECRET)) is False

    @pytest.mark.parametrize("candidate", [None, ""])
    def test_missing_candidate(self, candidate):
        assert verify(ORDER, SECRET, candidate) is False

    def test_missing_secret(self):
        with pytest.raises(ConfigurationError):
            verify(ORDER, None, "ABC")
