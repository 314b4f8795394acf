import logging

import pytest

from resourcekit import Dispatchable, RequestQueue, configure
from resourcekit.utils.logging import get_correlation_id, get_logger, set_correlation_id, time_call


class Item(Dispatchable, RequestQueue):
    def __init__(self, transport):
        self.transport = transport


def test_correlation_id_round_trip():
    token = set_correlation_id("test-token")
    assert token == "test-token"
    assert get_correlation_id() == "test-token"


def test_time_call_logs_duration(caplog):
    logger = get_logger("tests.logging")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("unit-test", logger, threshold_ms=0):
        pass
    messages = [record.message for record in caplog.records if record.name == logger.name]
    assert any("unit-test took" in message for message in messages)


@pytest.mark.asyncio
async def test_slow_transport_logged_as_warning_with_redacted_config(caplog):
    configure(slow_request_ms=0)
    caplog.set_level(logging.DEBUG, logger="resourcekit.lifecycle.queue")
    item = Item(lambda config: "ok")

    await item.send({"url": "/a", "headers": {"Authorization": "Bearer abc"}})

    timing = [record for record in caplog.records if "transport took" in record.message]
    assert timing and timing[0].levelno == logging.WARNING
    assert timing[0].request_config == {"url": "/a", "headers": {"Authorization": "***"}}


@pytest.mark.asyncio
async def test_request_id_used_as_correlation_id(caplog):
    caplog.set_level(logging.DEBUG, logger="resourcekit.lifecycle.queue")
    item = Item(lambda config: "ok")
    item.send({"url": "/a"})
    request_id = item.pending[0].request_id
    await item

    timing = [record for record in caplog.records if "transport took" in record.message]
    assert timing[0].correlation_id == request_id
