"""Tests for the webview folder picker."""

from __future__ import annotations

import sys
import types
from pathlib import Path

import pytest

from iconbox.studio.utils.folder_picker import WebviewFolderPicker


class MockWindow:
    def __init__(self, result):
        self.result = result
        self.calls: list[object] = []

    def create_file_dialog(self, dialog_type):
        self.calls.append(dialog_type)
        return self.result


@pytest.fixture(autouse=True)
def fake_webview(monkeypatch):
    """Stand-in module so tests run without a GUI backend."""
    mod = types.ModuleType("webview")
    mod.FOLDER_DIALOG = 20
    monkeypatch.setitem(sys.modules, "webview", mod)
    return mod


class TestWebviewFolderPicker:
    def test_returns_first_selection(self):
        w = MockWindow(("/icons/set",))
        assert WebviewFolderPicker().pick_folder(w) == Path("/icons/set")
        assert w.calls == [20]

    def test_dismissed(self):
        assert WebviewFolderPicker().pick_folder(MockWindow(None)) is None
        assert WebviewFolderPicker().pick_folder(MockWindow(())) is None

    def test_no_window(self):
        assert WebviewFolderPicker().pick_folder(None) is None
