"""Constants for the emitted bundle artifact."""

from __future__ import annotations

BUNDLE_SCHEMA_VERSION: str = "1.0.0"
BUNDLE_TEMP_PREFIX: str = ".tmp-skillpack-"
BUNDLE_TEMP_SUFFIX: str = ".json"
BASE_LAYER_NAME: str = "base"

# ANSI escape codes for terminal colouring.
ANSI_RESET: str = "\033[0m"
ANSI_BOLD: str = "\033[1m"
ANSI_RED: str = "\033[31;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"
ANSI_DIM: str = "\033[2m"

IMPACT_COLORS: dict[str, str] = {
    "CRITICAL": ANSI_RED,
    "HIGH": ANSI_RED,
    "MEDIUM-HIGH": ANSI_YELLOW,
    "MEDIUM": ANSI_YELLOW,
    "LOW-MEDIUM": ANSI_GREEN,
    "LOW": ANSI_GREEN,
}
