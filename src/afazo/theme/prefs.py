# src/afazo/theme/prefs.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonPreferenceStore:
    """
    Local preferences as a flat JSON object on disk ({"theme": "dark"}).

    Reads are best-effort: a missing or corrupt file reads as "no value".
    Writes are atomic (tmp file + os.replace) and raise on failure.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read preferences from %s", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring preferences file %s: not a JSON object", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)
        logger.debug("Saved preference %s=%s to %s", key, value, self._path)


class EnvSystemPreference:
    """
    Terminal stand-in for the platform colour-scheme query.

    Order:
    1. explicit override (AFAZO_SYSTEM_THEME=light|dark)
    2. COLORFGBG ("fg;bg"), set by many terminals; a dark background index means dark
    3. light
    """

    _DARK_BG = {0, 1, 2, 3, 4, 5, 6, 8}

    def __init__(self, override: str = "", environ: Mapping[str, str] | None = None) -> None:
        self._override = (override or "").strip().lower()
        self._environ = os.environ if environ is None else environ

    def prefers_dark(self) -> bool:
        if self._override in ("dark", "light"):
            return self._override == "dark"

        raw = self._environ.get("COLORFGBG", "")
        if raw:
            bg = raw.split(";")[-1].strip()
            if bg.isdigit():
                return int(bg) in self._DARK_BG
        return False
