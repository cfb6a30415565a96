"""Shared utilities."""

from .file_utils import read_json, write_atomically, write_model

__all__ = ["read_json", "write_atomically", "write_model"]
