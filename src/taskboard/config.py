# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app, built once at startup.
- Nothing here is required: every value has a usable default.
- Settings are injectable (tests pass their own object to the bootstrap).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKBOARD"

# Seed data ships with the package.
DEFAULT_SEED_DIR = Path(__file__).resolve().parent / "fixtures"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Seed data ----
    seed_dir: Path

    # ---- Simulated latency (multiplier; 0 disables the delays) ----
    latency_scale: float

    # ---- Recurrence: instances generated per frequency ----
    recurrence_daily_count: int
    recurrence_weekly_count: int
    recurrence_monthly_count: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard") or "taskboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/taskboard"))

        seed_dir = _env_path(_k("SEED_DIR"), DEFAULT_SEED_DIR)

        latency_scale = max(0.0, _env_float(_k("LATENCY_SCALE"), 1.0))

        recurrence_daily_count = max(0, _env_int(_k("RECURRENCE_DAILY_COUNT"), 7))
        recurrence_weekly_count = max(0, _env_int(_k("RECURRENCE_WEEKLY_COUNT"), 4))
        recurrence_monthly_count = max(0, _env_int(_k("RECURRENCE_MONTHLY_COUNT"), 3))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            seed_dir=seed_dir,
            latency_scale=latency_scale,
            recurrence_daily_count=recurrence_daily_count,
            recurrence_weekly_count=recurrence_weekly_count,
            recurrence_monthly_count=recurrence_monthly_count,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
