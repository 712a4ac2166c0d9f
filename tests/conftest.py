from __future__ import annotations

import io
from typing import Any, Callable

import httpx
import pytest
from rich.console import Console

from rtt_departures.config import RttSettings


def location_detail(**overrides: Any) -> dict[str, Any]:
    detail: dict[str, Any] = {
        "gbttBookedDeparture": "1000",
        "realtimeDeparture": "1000",
        "platform": "4",
        "destination": [{"description": "Bristol Temple Meads", "publicTime": "1130"}],
        "origin": [{"description": "London Paddington", "publicTime": "1000"}],
    }
    detail.update(overrides)
    return {key: value for key, value in detail.items() if value is not ...}


def search_payload(*details: dict[str, Any]) -> dict[str, Any]:
    return {
        "location": {"name": "London Paddington", "crs": "PAD"},
        "filter": None,
        "services": [{"serviceUid": f"P{idx:05d}", "locationDetail": d} for idx, d in enumerate(details)],
    }


def json_transport(
    payload: Any,
    *,
    status_code: int = 200,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


def handler_transport(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


def recording_console() -> Console:
    return Console(file=io.StringIO(), color_system=None, width=200, highlight=False)


@pytest.fixture
def settings() -> RttSettings:
    return RttSettings(username="rttapi_user", password="s3cret-pass")
