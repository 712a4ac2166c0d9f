from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Self

from .errors import DecodeError


def _required(data: Mapping[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in data:
        raise DecodeError(f"{where}: missing field '{key}'")
    return _typed(data[key], key, kind, where)


def _optional(data: Mapping[str, Any], key: str, kind: type, where: str) -> Any:
    value = data.get(key)
    if value is None:
        return None
    return _typed(value, key, kind, where)


def _typed(value: Any, key: str, kind: type, where: str) -> Any:
    if not isinstance(value, kind):
        raise DecodeError(
            f"{where}: field '{key}' should be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"{where}: expected an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class ServiceQuery:
    origin: str
    destination: Optional[str] = None


@dataclass(frozen=True)
class Station:
    description: str
    public_time: str

    @classmethod
    def from_payload(cls, data: Any) -> Self:
        data = _mapping(data, "station")
        return cls(
            description=_required(data, "description", str, "station"),
            public_time=_required(data, "publicTime", str, "station"),
        )


@dataclass(frozen=True)
class ServiceLocation:
    scheduled_departure: Optional[str]
    platform: Optional[str]
    realtime_departure: Optional[str]
    destination_stations: tuple[Station, ...]
    origin_stations: tuple[Station, ...]

    @classmethod
    def from_payload(cls, data: Any) -> Self:
        data = _mapping(data, "locationDetail")
        where = "locationDetail"
        destinations = _required(data, "destination", list, where)
        origins = _required(data, "origin", list, where)
        return cls(
            scheduled_departure=_optional(data, "gbttBookedDeparture", str, where),
            platform=_optional(data, "platform", str, where),
            realtime_departure=_optional(data, "realtimeDeparture", str, where),
            destination_stations=tuple(Station.from_payload(item) for item in destinations),
            origin_stations=tuple(Station.from_payload(item) for item in origins),
        )

    @property
    def first_destination(self) -> Optional[Station]:
        return self.destination_stations[0] if self.destination_stations else None

    @property
    def first_origin(self) -> Optional[Station]:
        return self.origin_stations[0] if self.origin_stations else None


@dataclass(frozen=True)
class Service:
    location: ServiceLocation

    @classmethod
    def from_payload(cls, data: Any) -> Self:
        data = _mapping(data, "service")
        return cls(location=ServiceLocation.from_payload(_required(data, "locationDetail", dict, "service")))


@dataclass(frozen=True)
class ApiResponse:
    services: tuple[Service, ...]

    @classmethod
    def from_payload(cls, data: Any) -> Self:
        """Decode a search response body.

        RTT sends ``"services": null`` when nothing runs in the search window,
        which is read as an empty board.
        """

        data = _mapping(data, "response")
        if "services" not in data:
            raise DecodeError("response: missing field 'services'")
        services = _optional(data, "services", list, "response") or []
        return cls(services=tuple(Service.from_payload(item) for item in services))
