import pytest

from resourcekit import Dispatchable, RequestQueue, RequestStatus
from tests.support import drain


class Item(Dispatchable, RequestQueue):
    def __init__(self, transport):
        self.transport = transport


def watch(item):
    fired = []
    for hook in ("before-request", "after-request", "after-request-error"):
        item.on(hook, lambda ctx, value, hook=hook: fired.append(hook))
    return fired


@pytest.mark.asyncio
async def test_cancel_in_flight_request_ignores_its_response(manual_transport):
    item = Item(manual_transport)
    fired = watch(item)
    callbacks = []
    item.send({"url": "/a"}, lambda res, response: callbacks.append(response))
    await drain()
    chain = item.chain

    assert item.cancel() is item
    assert item.chain is None
    assert item.pending[0].canceled
    manual_transport.resolve(0, {"ok": True})

    assert await chain is item
    assert item.status is RequestStatus.CANCELED
    assert not item.has_pending
    assert item.last_response is None
    assert fired == ["before-request"]
    assert callbacks == []


@pytest.mark.asyncio
async def test_cancel_ignores_transport_failure(manual_transport):
    item = Item(manual_transport)
    fired = watch(item)
    errors = []
    item.send({"url": "/a"}, None, lambda res, exc: errors.append(exc))
    await drain()
    chain = item.chain
    item.cancel()
    manual_transport.reject(0, RuntimeError("late failure"))

    assert await chain is item
    assert item.status is RequestStatus.CANCELED
    assert fired == ["before-request"]
    assert errors == []


@pytest.mark.asyncio
async def test_cancel_before_start_skips_all_hooks(manual_transport):
    item = Item(manual_transport)
    fired = watch(item)
    item.send({"url": "/a"})
    item.send({"url": "/b"})
    chain = item.chain
    item.cancel()

    assert await chain is item
    assert manual_transport.calls == []
    assert fired == []
    assert item.status is RequestStatus.CANCELED
    assert item.pending == ()


@pytest.mark.asyncio
async def test_cancel_with_many_pending_requests(manual_transport):
    item = Item(manual_transport)
    fired = watch(item)
    for index in range(3):
        item.send({"url": f"/{index}"})
    chain = item.chain
    await drain()
    item.cancel()
    assert all(descriptor.canceled for descriptor in item.pending)

    manual_transport.resolve(0, "first")
    await chain

    assert fired == ["before-request"]
    assert len(manual_transport.calls) == 1
    assert not item.has_pending
    assert item.status is RequestStatus.CANCELED


@pytest.mark.asyncio
async def test_send_after_cancel_starts_a_new_chain(manual_transport):
    item = Item(manual_transport)
    item.send({"url": "/a"})
    await drain()
    item.cancel()

    item.send({"url": "/b"})
    await drain()
    assert manual_transport.configs == [{"url": "/a"}, {"url": "/b"}]
    assert [descriptor.canceled for descriptor in item.pending] == [True, False]

    manual_transport.resolve(1, "B")
    await item
    assert item.status is RequestStatus.OK
    assert item.last_response == "B"
    manual_transport.resolve(0, "A")
    await drain()
    assert item.last_response == "B"
    assert not item.has_pending


@pytest.mark.asyncio
async def test_cancel_does_not_touch_settled_requests(manual_transport):
    item = Item(manual_transport)
    item.send({"url": "/a"})
    await drain()
    manual_transport.resolve(0, "A")
    await item
    item.cancel()
    assert item.status is RequestStatus.OK
    assert item.last_response == "A"
