"""Shared constants for Skillpack."""
