# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from afazo.config import Settings


def test_settings_defaults(monkeypatch) -> None:
    for name in ("API_URL", "PAGE_SIZE", "HTTP_TIMEOUT_SECONDS", "DATA_DIR", "PREFS_PATH", "SYSTEM_THEME"):
        monkeypatch.delenv(f"AFAZO_{name}", raising=False)

    s = Settings.from_env()

    assert s.api_url == "http://localhost:8080"
    assert s.page_size == 5
    assert s.http_timeout_seconds is None
    assert s.prefs_path == Path(".local/afazo") / "prefs.json"


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("AFAZO_API_URL", "http://example.test:9000/")
    monkeypatch.setenv("AFAZO_PAGE_SIZE", "not-a-number")
    monkeypatch.setenv("AFAZO_HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("AFAZO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("AFAZO_SYSTEM_THEME", " Dark ")
    monkeypatch.delenv("AFAZO_PREFS_PATH", raising=False)

    s = Settings.from_env()

    assert s.api_url == "http://example.test:9000"
    assert s.page_size == 5
    assert s.http_timeout_seconds == 2.5
    assert s.prefs_path == tmp_path / "prefs.json"
    assert s.system_theme == "dark"


def test_console_noise_filter() -> None:
    import logging

    from afazo.logging_setup import _ConsoleNoiseFilter

    f = _ConsoleNoiseFilter()

    def rec(name: str, level: int) -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    assert f.filter(rec("afazo.core.view", logging.DEBUG))
    assert not f.filter(rec("afazo.tasks.task_client", logging.INFO))
    assert f.filter(rec("afazo.tasks.task_client", logging.WARNING))
    assert not f.filter(rec("httpx", logging.WARNING))
    assert f.filter(rec("httpx", logging.ERROR))
    assert not f.filter(rec("py.warnings", logging.WARNING))
