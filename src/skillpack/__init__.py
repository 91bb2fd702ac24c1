"""Skillpack: compile Markdown skill rule files into a validated bundle."""

__version__ = "0.1.0"
