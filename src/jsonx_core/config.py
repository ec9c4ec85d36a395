"""Runtime settings for jsonx-core.

Settings are read from environment variables the first time they are needed.
The ``jsonx-repl`` entry point loads a ``.env`` file (python-dotenv) before
that happens, so the same variables can live there.

Variables:
    JSONX_MAX_ARRAY_INDEX  upper bound (exclusive) for indexes created by set
    JSONX_INDENT           indent width for pretty output
    JSONX_SORT_KEYS        "true"/"false", sort object keys in text output
    JSONX_LOG_LEVEL        level name used by the CLI's logging setup
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_MAX_ARRAY_INDEX = 10000

_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_WORDS:
        return True
    if raw in _FALSE_WORDS:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    max_array_index: int = DEFAULT_MAX_ARRAY_INDEX
    indent: int = 2
    sort_keys: bool = True
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.max_array_index <= 0:
            raise ValueError(
                f"max_array_index must be positive, got {self.max_array_index}"
            )
        if self.indent < 0:
            raise ValueError(f"indent must not be negative, got {self.indent}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            max_array_index=_env_int("JSONX_MAX_ARRAY_INDEX", DEFAULT_MAX_ARRAY_INDEX),
            indent=_env_int("JSONX_INDENT", 2),
            sort_keys=_env_bool("JSONX_SORT_KEYS", True),
            log_level=os.getenv("JSONX_LOG_LEVEL", "WARNING").strip() or "WARNING",
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def configure(settings: Settings | None) -> None:
    """Replace the process settings.  ``None`` re-reads the environment lazily."""
    global _settings
    _settings = settings
