"""Tests for the desktop window launcher."""

from __future__ import annotations

import sys
import types
from pathlib import Path
from unittest.mock import patch

import pytest

from iconbox.config.settings import Settings
from iconbox.library.service import LibraryService
from iconbox.studio import app


class MockEvent:
    def __init__(self):
        self.handlers: list = []

    def __iadd__(self, handler):
        self.handlers.append(handler)
        return self


class MockWindow:
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.events = types.SimpleNamespace(closing=MockEvent())


@pytest.fixture
def fake_webview(monkeypatch):
    """Stand-in module so the launcher runs without a GUI backend."""
    mod = types.ModuleType("webview")
    mod.windows = []
    mod.started = []

    def create_window(**kwargs):
        w = MockWindow(**kwargs)
        mod.windows.append(w)
        return w

    mod.create_window = create_window
    mod.start = lambda **kwargs: mod.started.append(kwargs)
    monkeypatch.setitem(sys.modules, "webview", mod)
    return mod


@pytest.fixture
def settings(tmp_path: Path, monkeypatch) -> Settings:
    s = Settings(data_dir=tmp_path / "data", frontend_url="http://localhost:5173")
    monkeypatch.setattr(app, "get_settings", lambda: s)
    return s


class TestMain:
    def test_window_wired_to_bridge(self, fake_webview, settings: Settings):
        app.main()
        (window,) = fake_webview.windows
        api = window.kwargs["js_api"]
        assert window.kwargs["url"] == "http://localhost:5173"
        assert api._state.window is window
        assert api._state.library.storage.data_dir == settings.data_dir
        assert fake_webview.started == [{"debug": False, "http_server": True}]

    def test_closing_cancels_imports(self, fake_webview, settings: Settings):
        app.main()
        (handler,) = fake_webview.windows[0].events.closing.handlers
        with patch.object(LibraryService, "cancel_imports", return_value=0) as cancel:
            assert handler() is None
        cancel.assert_called_once_with()


class TestFrontendUrl:
    def test_configured_url_wins(self, tmp_path: Path):
        s = Settings(data_dir=tmp_path, frontend_url="file:///ui/index.html")
        assert app.get_frontend_url(s) == "file:///ui/index.html"

    def test_missing_build_exits(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr(app, "__file__", str(tmp_path / "app.py"))
        with pytest.raises(SystemExit):
            app.get_frontend_url(Settings(data_dir=tmp_path))
