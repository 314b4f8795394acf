"""
Bike shop example showcasing hooks, serialized saves and cancellation.
"""

from __future__ import annotations

import asyncio
import itertools
from typing import Any, Dict, List

from resourcekit import InMemoryTransport, RequestError

from .models import TRACE, Bike, Shop


def bootstrap_transport(*, save_delay: float = 0.01) -> InMemoryTransport:
    transport = InMemoryTransport()
    store: Dict[int, Dict[str, Any]] = {1: {"id": 1, "brand": "Surly", "model": "Steamroller"}}
    ids = itertools.count(2)

    @transport.route("GET", "/bikes/1")
    def get_bike(config):
        return dict(store[1])

    @transport.route("POST", "/bikes")
    def create_bike(config):
        data = config["data"]
        if not data.get("brand"):
            return 422, {"brand": ["is required"]}
        bike_id = next(ids)
        store[bike_id] = {"id": bike_id, **data}
        return 201, dict(store[bike_id])

    @transport.route("PUT", "/bikes/1", delay=save_delay)
    def update_bike(config):
        if config["headers"].get("Authorization") is None:
            return 401, {"error": "unauthorized"}
        store[1].update(config["data"])
        return dict(store[1])

    return transport


def save_with_token(bike: Bike, token: str) -> Bike:
    """
    Save ``bike`` sending an authorization header, only for this call.
    """

    def add_token(resource, config):
        config["headers"]["Authorization"] = f"Bearer {token}"

    return bike.decorate({"before-request": add_token}, lambda resource: resource.save())


async def _run(transport: InMemoryTransport) -> List[str]:
    TRACE.clear()
    shop = Shop(transport=transport)
    shop.on("after-request-error", lambda resource, exc: TRACE.append(f"shop:error {exc.status}"))

    bike = shop.build(Bike, id=1)
    bike.on("after-request", lambda resource, response: TRACE.append(f"bike:ok {response.status}"))

    await bike.fetch()
    bike.model = "Stragger"
    save_with_token(bike, "s3cr3t")
    bike.save()  # no token: rejected, but queued after the authorized save
    try:
        await bike
    except RequestError as exc:
        TRACE.append(f"rejected:{exc.response.status}")

    # Unscoped, so its hooks bubble to the Bike type instead of the shop.
    draft = Bike(transport=transport, model="Pugsley")
    try:
        await draft.save()
    except RequestError:
        TRACE.append(f"draft:{draft.status.value}")

    slow = shop.build(Bike, id=1, model="Ogre")
    save_with_token(slow, "s3cr3t").cancel()
    await asyncio.sleep(0.05)
    TRACE.append(f"slow:{slow.status.value}")
    return list(TRACE)


def run_demo(transport: InMemoryTransport | None = None) -> List[str]:
    return asyncio.run(_run(transport or bootstrap_transport()))


if __name__ == "__main__":  # pragma: no cover - manual demo entry point
    for line in run_demo():
        print(line)
