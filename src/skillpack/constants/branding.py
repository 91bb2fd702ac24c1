"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "SKILLPACK"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ SKILLPACK",
    "     // skill bundle compiler",
)
BUILD_SUMMARY_TITLE: str = "Build summary"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} skill bundle compiler"))
