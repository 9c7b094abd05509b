"""Logging utilities for Plasticity.

Provides color-coded output to distinguish engine steps, finished edits and errors.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    BLUE = "\033[94m"      # Deterministic engine steps (reindex, renumber)
    RED = "\033[91m"       # Errors
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if PLASTICITY_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("PLASTICITY_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def debug_enabled(variable: str) -> bool:
    """True when ``variable`` is set to 1/true/yes."""
    return os.getenv(variable, "").lower() in ("1", "true", "yes")


def log_engine(message: str) -> None:
    """Log a deterministic engine step (blue)."""
    print(colored(f"{LOG_TAG_ENGINE} {message}", Color.BLUE))


def log_error(message: str) -> None:
    """Log an error (red)."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))


# Markers for operation types (color-blind accessible)
LOG_TAG_ENGINE = "[•]"    # Deterministic engine step
LOG_TAG_ERROR = "[!]"     # Error
LOG_TAG_SUCCESS = "[✓]"   # Success
LOG_TAG_INFO = "[i]"      # Information
