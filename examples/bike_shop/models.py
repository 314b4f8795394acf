"""
Resources for the resourcekit bike shop example.
"""

from __future__ import annotations

from typing import Any, Dict, List

from resourcekit import Resource

TRACE: List[str] = []


def _trace_request(resource: Any, config: Dict[str, Any]) -> None:
    TRACE.append(f"type:{config['method']} {config['url']}")


class Shop(Resource):
    class Meta:
        name = "shop"


class Bike(Resource):
    class Meta:
        hooks = {"before-request": _trace_request}

    id: Any = None
    brand: str = ""
    model: str = ""

    @property
    def url(self) -> str:
        if self.id is None:
            return "/bikes"
        return f"/bikes/{self.id}"

    def to_payload(self) -> Dict[str, Any]:
        return {"brand": self.brand, "model": self.model}

    def apply(self, data: Dict[str, Any]) -> None:
        for key in ("id", "brand", "model"):
            if key in data:
                setattr(self, key, data[key])

    def fetch(self) -> "Bike":
        return self.send(
            {"method": "GET", "url": self.url},
            lambda bike, response: bike.apply(response.data),
        )

    def save(self) -> "Bike":
        method = "POST" if self.id is None else "PUT"
        return self.send(
            {"method": method, "url": self.url, "data": self.to_payload(), "headers": {}},
            lambda bike, response: bike.apply(response.data),
        )
