from __future__ import annotations

import argparse
import logging
import os
from typing import Optional, Sequence

from dotenv import load_dotenv
from rich.console import Console

from . import __version__
from .config import ConfigError, RttSettings
from .formatter import write_table
from .models import ServiceQuery
from .rtt_api import RttError, fetch_services

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rtt-departures",
        description="Show departures from a station using the RealTimeTrains API.",
    )
    parser.add_argument("origin", help="Origin station code (e.g., PAD for Paddington)")
    parser.add_argument(
        "destination",
        nargs="?",
        default=None,
        help="Optional destination station code (e.g., BRI for Bristol)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging() -> None:
    level = os.environ.get("RTT_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the departures board."""

    args = build_parser().parse_args(argv)
    load_dotenv()
    _configure_logging()

    errors = Console(stderr=True, highlight=False)
    try:
        settings = RttSettings.from_env()
        query = ServiceQuery(origin=args.origin, destination=args.destination)
        services = fetch_services(query, settings)
    except (ConfigError, RttError) as exc:
        logger.debug("Aborting: %s", type(exc).__name__)
        errors.print(f"error: {exc}", markup=False, soft_wrap=True)
        return 1

    write_table(Console(highlight=False), services)
    return 0
