"""Environment-driven settings."""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv  # pip install python-dotenv

load_dotenv()

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    validate_dst_flags: bool = False
    # Offsets closer than this are treated as "no DST"
    offset_diff_threshold_seconds: int = 60


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings() -> Settings:
    """Read settings from the environment; a .env file is loaded once at import."""
    return Settings(
        validate_dst_flags=_env_bool("TZCHANGE_VALIDATE_DST_FLAGS", False),
        offset_diff_threshold_seconds=_env_int("TZCHANGE_OFFSET_DIFF_THRESHOLD", 60),
    )
