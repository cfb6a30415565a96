"""PyWebView application setup."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from iconbox.config.logging import setup_logging
from iconbox.config.settings import Settings, get_settings
from iconbox.library.service import LibraryService

from .bridge import LibraryBridge

logger = logging.getLogger(__name__)


def get_frontend_url(settings: Settings) -> str:
    """The configured frontend URL, else the built frontend next to this module."""
    if settings.frontend_url:
        return settings.frontend_url
    dist_path = Path(__file__).parent / "frontend" / "dist" / "index.html"
    if not dist_path.exists():
        logger.error("Frontend not built and ICONBOX_FRONTEND_URL not set")
        sys.exit(1)
    return str(dist_path)


def main() -> None:
    """Launch the IconBox desktop window."""
    settings = get_settings()
    setup_logging(settings.log_level)
    try:
        import webview
    except ImportError:
        logger.error("pywebview is not installed. Run: pip install 'iconbox[app]'")
        sys.exit(1)

    library = LibraryService(config=settings)
    api = LibraryBridge(library=library)
    window = webview.create_window(
        title="IconBox",
        url=get_frontend_url(settings),
        js_api=api,
        width=1200,
        height=800,
        min_size=(720, 480),
        resizable=True,
        text_select=False,
    )
    api.set_window(window)

    def on_closing():
        # A False-ish return would veto the close
        library.cancel_imports()

    window.events.closing += on_closing
    webview.start(debug=settings.debug, http_server=True)


if __name__ == "__main__":
    main()
