"""Helpers for building skill source trees in tests."""
