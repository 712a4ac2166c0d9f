from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from .models import Service

TOTAL_WIDTH = 90
COLUMN_WIDTHS = (6, 6, 10, 10, 8, 20, 20)
HEADINGS = ("Time", "Exp.", "Status", "Platform", "Arrival", "Origin", "Destination")

MISSING_TIME = "N/A"
MISSING_PLATFORM = "TBA"
MISSING_STATION = "Unknown"

ON_TIME = "On time"
UNKNOWN = "Unknown"
DELAYED = "Delayed"

_STATUS_STYLES = {ON_TIME: "green", UNKNOWN: "yellow", DELAYED: "red"}
PLATFORM_STYLE = "blue"


@dataclass(frozen=True)
class Row:
    time: str
    expected: str
    status: str
    platform: str
    arrival: str
    origin: str
    destination: str


def derive_status(time: str, expected: str) -> str:
    """Classify a departure from its display times.

    Equal strings win before the missing check, so a service with neither a
    booked nor a realtime departure reads as on time.
    """

    if time == expected:
        return ON_TIME
    if MISSING_TIME in (time, expected):
        return UNKNOWN
    return DELAYED


def status_style(status: str) -> str:
    return _STATUS_STYLES[status]


def _or(value: Optional[str], fallback: str) -> str:
    return value if value is not None else fallback


def build_row(service: Service) -> Row:
    location = service.location
    time = _or(location.scheduled_departure, MISSING_TIME)
    expected = _or(location.realtime_departure, MISSING_TIME)
    destination = location.first_destination
    origin = location.first_origin

    return Row(
        time=time,
        expected=expected,
        status=derive_status(time, expected),
        platform=_or(location.platform, MISSING_PLATFORM),
        arrival=destination.public_time if destination else MISSING_STATION,
        origin=origin.description if origin else MISSING_STATION,
        destination=destination.description if destination else MISSING_STATION,
    )


def build_rows(services: Sequence[Service]) -> list[Row]:
    return [build_row(service) for service in services]


def _cells(values: Sequence[str]) -> list[str]:
    return [value.ljust(width) for value, width in zip(values, COLUMN_WIDTHS)]


def _preamble(count: int) -> list[str]:
    return [
        f"{count} services found",
        "=" * TOTAL_WIDTH,
        " ".join(_cells(HEADINGS)),
        "-" * TOTAL_WIDTH,
    ]


def render(services: Sequence[Service]) -> list[str]:
    """Return the plain text lines of the departures table."""

    lines = _preamble(len(services))
    lines.extend(" ".join(_cells(astuple(row))) for row in build_rows(services))
    return lines


def _styled_row(row: Row) -> Text:
    time, expected, status, platform, *rest = _cells(astuple(row))
    text = Text(" ".join([time, expected]) + " ")
    text.append(status, style=status_style(row.status))
    text.append(" ")
    text.append(platform, style=PLATFORM_STYLE)
    text.append(" " + " ".join(rest))
    return text


def write_table(console: Console, services: Sequence[Service]) -> None:
    """Print the departures table with Status and Platform colored."""

    for line in _preamble(len(services)):
        console.print(line, markup=False, highlight=False, soft_wrap=True)
    for row in build_rows(services):
        console.print(_styled_row(row), soft_wrap=True)
