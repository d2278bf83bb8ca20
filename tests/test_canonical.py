"""Tests for canonical signing input."""

from paygate.models.params import ParameterMap
from paygate.signing.canonical import canonicalize


class TestOrdering:
    def test_sorted_by_key(self):
        assert canonicalize({"b": "2", "a": "1", "c": "3"}) == "a=1&b=2&c=3"

    def test_insertion_order_irrelevant(self):
        first = canonicalize({"total_fee": "100", "out_trade_no": "123", "body": "x"})
        second = canonicalize({"body": "x", "out_trade_no": "123", "total_fee": "100"})
        assert first == second

    def test_byte_order(self):
        """Uppercase sorts before underscore, which sorts before lowercase."""
        assert canonicalize({"b": "1", "B": "2", "_a": "3"}) == "B=2&_a=3&b=1"

    def test_order_example(self):
        params = {"total_fee": "100", "out_trade_no": "1217752501201407033233368018"}
        assert canonicalize(params) == "out_trade_no=1217752501201407033233368018&total_fee=100"


class TestFiltering:
    def test_sign_field_excluded(self):
        assert canonicalize({"a": "1", "sign": "ABC"}) == "a=1"

    def test_empty_values_excluded(self):
        assert canonicalize({"a": "1", "b": "", "c": None}) == "a=1"

    def test_composite_values_excluded(self):
        params = {"a": "1", "detail": {"goods_id": "2"}, "coupons": ["x", "y"]}
        assert canonicalize(params) == "a=1"

    def test_zero_is_kept(self):
        assert canonicalize({"a": 0, "b": "0"}) == "a=0&b=0"

    def test_numbers_rendered_plainly(self):
        assert canonicalize({"total_fee": 100, "rate": 1.5}) == "rate=1.5&total_fee=100"

    def test_integral_float_rendered_as_integer(self):
        assert canonicalize({"total_fee": 1.0}) == "total_fee=1"

    def test_nothing_left_is_empty_string(self):
        assert canonicalize({}) == ""
        assert canonicalize({"sign": "X", "a": ""}) == ""

    def test_accepts_parameter_map(self):
        assert canonicalize(ParameterMap({"b": "2", "a": "1"})) == "a=1&b=2"
