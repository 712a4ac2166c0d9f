from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Sequence
from urllib.parse import quote

import httpx

from .config import RttSettings
from .errors import AuthHeaderError, DecodeError, RttError, TransportError
from .models import ApiResponse, Service, ServiceQuery

__all__ = [
    "AuthHeaderError",
    "DecodeError",
    "RttClient",
    "RttError",
    "TransportError",
    "fetch_services",
    "search_path",
]

logger = logging.getLogger(__name__)


def search_path(query: ServiceQuery) -> str:
    """Return the location search path for ``query``."""

    path = f"/api/v1/json/search/{quote(query.origin, safe='')}"
    if query.destination is not None:
        path = f"{path}/to/{quote(query.destination, safe='')}"
    return path


def _check_credentials(username: str, password: str) -> None:
    for name, value in (("RTT_USERNAME", username), ("RTT_PASSWORD", password)):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise AuthHeaderError(f"{name} cannot be encoded for Basic auth") from None


class RttClient:
    """Async client for the RealTimeTrains location search endpoint."""

    def __init__(
        self,
        settings: RttSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        _check_credentials(settings.username, settings.password)
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            headers={"Accept": "application/json"},
            follow_redirects=True,
            auth=httpx.BasicAuth(settings.username, settings.password),
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RttClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def search(self, query: ServiceQuery) -> Sequence[Service]:
        """Return the services listed for ``query`` in API order."""

        path = search_path(query)
        logger.debug("GET %s%s", self._settings.base_url, path)
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as exc:
            raise TransportError(
                f"RealTimeTrains request failed while requesting departures: {exc}"
            ) from exc

        payload = self._json_or_error(response, "requesting departures")
        services = ApiResponse.from_payload(payload).services
        logger.debug("Decoded %d services", len(services))
        return list(services)

    @staticmethod
    def _json_or_error(response: httpx.Response, action: str) -> Any:
        if response.status_code >= 400:
            raise TransportError(
                f"RealTimeTrains error {response.status_code} while {action}: {response.text[:200]}"
            )
        try:
            return response.json()
        except ValueError as exc:
            snippet = response.text[:200] or "<empty body>"
            content_type = response.headers.get("content-type", "unknown")
            raise DecodeError(
                "RealTimeTrains returned a non-JSON response while "
                f"{action} (status {response.status_code}, content-type {content_type}): {snippet}"
            ) from exc


async def _fetch(
    query: ServiceQuery,
    settings: RttSettings,
    transport: Optional[httpx.AsyncBaseTransport],
) -> Sequence[Service]:
    async with RttClient(settings, transport=transport) as client:
        return await client.search(query)


def fetch_services(
    query: ServiceQuery,
    settings: RttSettings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[Service]:
    """Perform the single departures request and wait for the decoded services."""

    return list(asyncio.run(_fetch(query, settings, transport)))
