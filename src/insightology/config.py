from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

_PERIOD_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([smhdw]?)\s*$", re.IGNORECASE)
_PERIOD_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


def parse_period(text: str) -> timedelta:
    """Parse a period like ``30m``, ``4h``, ``1d`` or plain seconds (``90``)."""
    match = _PERIOD_RE.match(text)
    if match is None:
        raise ValueError(f"Invalid period: {text!r}")
    amount, unit = match.groups()
    return timedelta(**{_PERIOD_UNITS[unit.lower()]: float(amount)})


@dataclass(frozen=True)
class InsightologyConfig:
    source_model: str = ""
    default_period: timedelta = field(default_factory=lambda: timedelta(days=1))
    verbose: bool = False


def load_config() -> InsightologyConfig:
    """Load config from environment variables.

    Loads .env file if present in the current directory.
    """
    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    return InsightologyConfig(
        source_model=os.environ.get("INSIGHTOLOGY_SOURCE_MODEL", ""),
        default_period=parse_period(os.environ.get("INSIGHTOLOGY_DEFAULT_PERIOD", "1d")),
        verbose=os.environ.get("INSIGHTOLOGY_VERBOSE", "").lower() in ("1", "true", "yes"),
    )
