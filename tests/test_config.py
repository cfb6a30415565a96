"""Tests for configuration and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from iconbox.config import clear_settings_cache, get_settings, setup_logging
from iconbox.exceptions import CollectionNotFoundError, IconboxError


@pytest.fixture(autouse=True)
def _clear_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestSettings:
    def test_reads_prefixed_env(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("ICONBOX_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("ICONBOX_LOG_LEVEL", "debug")
        monkeypatch.setenv("ICONBOX_STRICT_SETTINGS", "false")
        s = get_settings()
        assert s.data_dir == tmp_path
        assert s.log_level == "DEBUG"
        assert s.strict_settings is False
        assert s.import_subfolders is True

    def test_cached_until_cleared(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("ICONBOX_DATA_DIR", str(tmp_path / "a"))
        first = get_settings()
        monkeypatch.setenv("ICONBOX_DATA_DIR", str(tmp_path / "b"))
        assert get_settings() is first
        clear_settings_cache()
        assert get_settings().data_dir == tmp_path / "b"


class TestLogging:
    def test_single_rich_handler(self):
        logger = setup_logging("WARNING")
        setup_logging("DEBUG")
        handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.propagate is False


class TestExceptions:
    def test_str_includes_details(self):
        e = IconboxError("Failed", details="disk full")
        assert str(e) == "Failed\n  Details: disk full"
        assert str(IconboxError("Failed")) == "Failed"

    def test_not_found_is_lookup_error(self):
        assert isinstance(CollectionNotFoundError("x"), LookupError)
