# src/afazo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every value has a local default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "AFAZO"

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


def _env_float_opt(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError:
        return None


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

    # ---- Remote task store ----
    api_url: str
    # None means "wait forever" (requests are never cancelled).
    http_timeout_seconds: float | None

    # ---- View ----
    page_size: int

    # ---- Theme ----
    # Stands in for the platform colour-scheme signal when set (light/dark).
    system_theme: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    prefs_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "afazo").strip() or "afazo"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_url = (_env(_k("API_URL"), "http://localhost:8080").strip() or "http://localhost:8080").rstrip("/")
        http_timeout_seconds = _env_float_opt(_k("HTTP_TIMEOUT_SECONDS"))

        page_size = max(1, _env_int(_k("PAGE_SIZE"), 5))

        system_theme = _env(_k("SYSTEM_THEME"), "").strip().lower()

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/afazo"))
        prefs_path = _env_path(_k("PREFS_PATH"), data_dir / "prefs.json")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_url=api_url,
            http_timeout_seconds=http_timeout_seconds,
            page_size=page_size,
            system_theme=system_theme,
            data_dir=data_dir,
            prefs_path=prefs_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
