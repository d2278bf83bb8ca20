"""Tests for the gateway trace sink."""

import logging

from paygate.audit import logger as audit_logger
from paygate.audit.logger import GatewayLogger, configure_logging
from paygate.config import Settings
from paygate.models.params import ParameterMap


class TestGatewayLogger:
    def test_debug_trace(self, caplog):
        caplog.set_level(logging.DEBUG, logger="paygate.audit")
        GatewayLogger().debug("Request to gateway API", {"url": "https://example.test/pay", "body": "测试"})

        record = caplog.records[-1]
        assert record.levelno == logging.DEBUG
        assert record.getMessage().startswith("GATEWAY | Request to gateway API | ")
        assert "测试" in record.getMessage()

    def test_parameter_map_context(self, caplog):
        caplog.set_level(logging.WARNING, logger="paygate.audit")
        GatewayLogger().warning("Response sign verify FAILED", ParameterMap({"return_code": "SUCCESS"}))
        assert '{"return_code": "SUCCESS"}' in caplog.records[-1].getMessage()

    def test_unserializable_context_does_not_raise(self, caplog):
        caplog.set_level(logging.WARNING, logger="paygate.audit")
        circular = {}
        circular["self"] = circular
        GatewayLogger().warning("odd context", circular)
        assert "{'self': {...}}" in caplog.records[-1].getMessage()

    def test_context_truncated(self, caplog):
        caplog.set_level(logging.DEBUG, logger="paygate.audit")
        GatewayLogger(max_context=10).debug("long", {"attach": "x" * 100})
        assert caplog.records[-1].getMessage() == 'GATEWAY | long | {"attach":'

    def test_disabled_level_skipped(self, caplog):
        caplog.set_level(logging.WARNING, logger="paygate.audit")
        GatewayLogger().debug("hidden", {"a": 1})
        assert not [r for r in caplog.records if "hidden" in r.getMessage()]

    def test_custom_logger(self, caplog):
        caplog.set_level(logging.DEBUG, logger="merchant.payments")
        GatewayLogger(logging.getLogger("merchant.payments")).debug("hello")
        assert caplog.records[-1].name == "merchant.payments"


def test_configure_logging(monkeypatch):
    captured = {}
    monkeypatch.setattr(audit_logger.logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    configure_logging(Settings(_env_file=None, log_level="debug"))

    assert captured["level"] == logging.DEBUG
    assert captured["format"] == audit_logger.LOG_FORMAT
