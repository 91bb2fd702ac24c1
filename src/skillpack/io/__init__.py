"""Shared file I/O helpers."""

from .json_io import dumps_canonical, load_json_file, write_json_atomic, write_text_atomic

__all__ = ["dumps_canonical", "load_json_file", "write_json_atomic", "write_text_atomic"]
