"""
Shared fixtures: deterministic clock and sleeper, mocked HTTP transport,
and a Yahoo adapter wired to both.
"""

from unittest.mock import AsyncMock

import pytest

from tests.fixtures import (
    FakeClock,
    RecordingSleeper,
    create_http_response,
    create_quote_payload,
)
from vendor_gateway.ingestion.adapters.yahoo_plugin import (
    YahooFinanceAdapter,
    YahooFinanceClient,
)
from vendor_gateway.ingestion.config.value_objects import (
    BulkDownloadConfig,
    YahooFinanceConfig,
)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def recording_sleeper():
    return RecordingSleeper()


@pytest.fixture
def mock_http_client():
    """Mock IHttpClient returning a default quote payload."""
    client = AsyncMock()
    client.get = AsyncMock(return_value=create_http_response(create_quote_payload()))
    client.close = AsyncMock()
    return client


@pytest.fixture
def yahoo_config():
    return YahooFinanceConfig(
        base_url="https://query1.test/chart/",
        bulk_config=BulkDownloadConfig(batch_size=10, cooldown_seconds=1.0),
    )


@pytest.fixture
def yahoo_adapter(mock_http_client, yahoo_config, fake_clock, recording_sleeper):
    client = YahooFinanceClient(mock_http_client, yahoo_config)
    return YahooFinanceAdapter(
        client,
        config=yahoo_config,
        clock=fake_clock,
        sleeper=recording_sleeper,
    )
