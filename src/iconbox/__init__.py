"""iconbox - a local SVG icon library."""

__version__ = "0.1.0"
