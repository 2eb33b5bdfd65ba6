"""Configuration management for eventcal."""

import logging
import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)

EVENTCAL_HOME = Path(os.environ.get("EVENTCAL_HOME", Path.home() / "eventcal"))
CONFIG_FILE = EVENTCAL_HOME / "config" / "eventcal.conf"


@dataclass
class Config:
    """eventcal configuration."""

    events_source: str = "events.json"
    year: int = field(default_factory=lambda: date.today().year)
    visible_cap: int = 3
    default_categories: list[str] = field(default_factory=list)
    http_timeout: int = 10


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}, using {default}")
        return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from eventcal.conf, then apply env overrides."""
    config = Config()
    path = path or CONFIG_FILE

    if path.exists():
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "events_source":
                    config.events_source = value
                case "year":
                    config.year = _parse_int(key, value, config.year)
                case "visible_cap":
                    config.visible_cap = _parse_int(key, value, config.visible_cap)
                case "default_categories":
                    config.default_categories = [c.strip() for c in value.split(",") if c.strip()]
                case "http_timeout":
                    config.http_timeout = _parse_int(key, value, config.http_timeout)
                case _:
                    logger.debug(f"Ignoring unknown config key {key!r}")

    if os.environ.get("EVENTCAL_SOURCE"):
        config.events_source = os.environ["EVENTCAL_SOURCE"]

    return config
