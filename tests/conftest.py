"""Shared test fixtures."""

import pytest

from paygate.config import Settings
from paygate.transport.mock_transport import MockGatewayTransport

from helpers import SECRET


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        secret_key=SECRET,
        app_id="wx2421b1c4370ec43b",
        mch_id="10000100",
    )


@pytest.fixture
def gateway() -> MockGatewayTransport:
    return MockGatewayTransport(secret=SECRET)
