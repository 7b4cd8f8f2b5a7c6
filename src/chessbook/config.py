"""
Configuration and logging bootstrap for chessbook.

- Reads settings from environment variables (``CHESSBOOK_*``).
- ``configure_logging()`` installs a root handler using those settings; library
  code itself only ever asks for module loggers.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _get(
    environ: Mapping[str, str],
    name: str,
    default: Any,
    cast: Callable[[str], Any] | None = None,
) -> Any:
    env = environ.get(name)
    if env is None or env == "":
        return default
    return cast(env) if cast else env


def _level(value: str) -> int:
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


@dataclass(frozen=True)
class Settings:
    log_level: int = logging.WARNING
    log_format: str = DEFAULT_LOG_FORMAT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            log_level=_get(env, "CHESSBOOK_LOG_LEVEL", logging.WARNING, cast=_level),
            log_format=_get(env, "CHESSBOOK_LOG_FORMAT", DEFAULT_LOG_FORMAT),
        )


def configure_logging(settings: Settings | None = None) -> Settings:
    """Configure root logging from *settings* (environment if omitted)."""
    settings = settings if settings is not None else Settings.from_env()
    logging.basicConfig(level=settings.log_level, format=settings.log_format)
    logging.getLogger("chessbook").setLevel(settings.log_level)
    return settings
