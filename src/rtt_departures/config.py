from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Self


class ConfigError(RuntimeError):
    """Raised when required settings are missing from the environment."""


@dataclass(frozen=True)
class RttSettings:
    """Credentials and options for the RealTimeTrains API."""

    username: str
    password: str = field(repr=False)
    base_url: str = "https://api.rtt.io"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Create settings from ``RTT_USERNAME``/``RTT_PASSWORD``."""

        env = os.environ if environ is None else environ
        missing = [name for name in ("RTT_USERNAME", "RTT_PASSWORD") if not env.get(name)]
        if missing:
            raise ConfigError(
                f"Missing RealTimeTrains credential in environment: {', '.join(missing)}"
            )

        base_url = env.get("RTT_BASE_URL") or cls.base_url
        return cls(
            username=env["RTT_USERNAME"],
            password=env["RTT_PASSWORD"],
            base_url=base_url,
        )
