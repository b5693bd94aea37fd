from __future__ import annotations

from pathlib import Path

import pytest

from browser_tools.runtime.settings import load_settings
from browser_tools.config import DEFAULT_PORT, DEFAULT_SCREENSHOT_DIR, DEFAULT_SCREENSHOT_TIMEOUT_S

_ENV_NAMES = (
    "BROWSER_TOOLS_HOST",
    "BROWSER_TOOLS_PORT",
    "SCREENSHOT_DIR",
    "SCREENSHOT_TIMEOUT_S",
    "LOG_BUFFER_MAX",
    "LOG_BUFFER_TRIM_TO",
    "WS_IDLE_TIMEOUT_S",
    "WS_WATCHDOG_TICK_S",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.server.port == DEFAULT_PORT
    assert settings.capture.screenshot_dir == DEFAULT_SCREENSHOT_DIR
    assert settings.capture.timeout_s == DEFAULT_SCREENSHOT_TIMEOUT_S
    assert settings.logs.max_entries == 1000
    assert settings.logs.trim_to == 500


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("BROWSER_TOOLS_PORT", "4000")
    monkeypatch.setenv("SCREENSHOT_DIR", str(tmp_path))
    monkeypatch.setenv("SCREENSHOT_TIMEOUT_S", "2.5")
    monkeypatch.setenv("WS_IDLE_TIMEOUT_S", "0")

    settings = load_settings()
    assert settings.server.port == 4000
    assert settings.capture.screenshot_dir == tmp_path
    assert settings.capture.timeout_s == 2.5
    assert settings.websocket.idle_timeout_s == 0.0


@pytest.mark.parametrize(
    ("name", "value"),
    [("BROWSER_TOOLS_PORT", "99999"), ("BROWSER_TOOLS_PORT", "abc"), ("SCREENSHOT_TIMEOUT_S", "-1")],
)
def test_invalid_values_fall_back(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    settings = load_settings()
    assert settings.server.port == DEFAULT_PORT
    assert settings.capture.timeout_s == DEFAULT_SCREENSHOT_TIMEOUT_S


def test_trim_target_is_clamped_below_cap(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_BUFFER_MAX", "100")
    monkeypatch.setenv("LOG_BUFFER_TRIM_TO", "500")
    settings = load_settings()
    assert settings.logs.max_entries == 100
    assert settings.logs.trim_to == 50


@pytest.mark.parametrize("value", ["inf", "nan"])
def test_non_finite_timeout_falls_back(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("SCREENSHOT_TIMEOUT_S", value)
    assert load_settings().capture.timeout_s == DEFAULT_SCREENSHOT_TIMEOUT_S
