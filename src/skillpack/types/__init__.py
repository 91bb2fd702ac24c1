"""Shared type aliases for Skillpack."""

from .common import ImpactLevel, JsonObject, JsonScalar, JsonValue

__all__ = ["ImpactLevel", "JsonObject", "JsonScalar", "JsonValue"]
