"""Tests for studio decorators."""

import logging

from iconbox.exceptions import CollectionNotFoundError
from iconbox.studio.utils.decorators import bridge_command


# =============================================================================
# Test fixtures
# =============================================================================
class MockService:
    """Mock service class for decorator testing."""

    @bridge_command
    def ok(self, value=None):
        return value

    @bridge_command
    def missing(self):
        raise CollectionNotFoundError("Collection 'x' not found", details="id=x")

    @bridge_command
    def broken(self):
        raise KeyError("boom")


class TestBridgeCommand:
    """Tests for bridge_command."""

    def test_wraps_result(self):
        assert MockService().ok(5) == {"success": True, "data": 5, "error": None, "code": None}

    def test_keeps_method_name(self):
        assert MockService.ok.__name__ == "ok"

    def test_library_error_uses_message_not_details(self):
        resp = MockService().missing()
        assert resp["error"] == "Collection 'x' not found"
        assert resp["code"] == "not_found"

    def test_unexpected_error_logged(self, caplog, monkeypatch):
        monkeypatch.setattr(logging.getLogger("iconbox"), "propagate", True)
        caplog.set_level(logging.ERROR, logger="iconbox")
        resp = MockService().broken()
        assert resp["code"] == "internal"
        assert any("Unexpected error in broken" in r.getMessage() for r in caplog.records)
