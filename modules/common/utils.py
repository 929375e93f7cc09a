"""
Common utility functions for all algorithms.

This module provides utilities organized into the following categories:
- System: Platform-specific configuration
- Domain: Regime-specific formatting (labels, prices, percentages)
- CLI/UI: Text formatting and logging
"""

import sys
import io
import os
import pandas as pd
from typing import Optional
from colorama import Fore, Style

from modules.config import REGIME_RANGE_BOUND, REGIME_TRENDING

# ============================================================================
# SYSTEM UTILITIES
# ============================================================================

def configure_windows_stdio() -> None:
    """
    Configure Windows stdio encoding for UTF-8 support.

    Only applies to interactive CLI runs, not during pytest.

    Note:
        - Only runs on Windows (win32 platform)
        - Skips configuration during pytest runs
        - Only configures if stdout/stderr have buffer attribute
    """
    if sys.platform != "win32":
        return
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return
    if not hasattr(sys.stdout, "buffer") or isinstance(sys.stdout, io.TextIOWrapper):
        return
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8", errors="replace")


# ============================================================================
# DOMAIN-SPECIFIC UTILITIES (Regimes)
# ============================================================================

def regime_color(label: Optional[str]) -> str:
    """
    Returns the colorama color used to display a regime label.

    Args:
        label: Regime label string ("RANGE_BOUND" / "TRENDING") or None

    Returns:
        Colorama Fore color
    """
    if label == REGIME_RANGE_BOUND:
        return Fore.GREEN
    if label == REGIME_TRENDING:
        return Fore.RED
    return Fore.WHITE


def format_slope_direction(direction: int) -> str:
    """Formats a slope direction (-1/0/1) as an arrow-like marker."""
    if direction > 0:
        return "UP"
    if direction < 0:
        return "DOWN"
    return "FLAT"


# ============================================================================
# CLI/UI UTILITIES
# ============================================================================

# --- Text Formatting ---

def color_text(text: str, color: str = Fore.WHITE, style: str = Style.NORMAL) -> str:
    """
    Applies color and style to text using colorama.

    Args:
        text: Text to format
        color: Colorama Fore color (default: Fore.WHITE)
        style: Colorama Style (default: Style.NORMAL)

    Returns:
        Formatted text string with color and style codes
    """
    return f"{style}{color}{text}{Style.RESET_ALL}"


def format_price(value: Optional[float]) -> str:
    """
    Formats prices/indicators with adaptive precision so tiny values remain readable.

    Args:
        value: Numeric value to format

    Returns:
        Formatted price string with appropriate precision, or "N/A" if invalid
    """
    if value is None or pd.isna(value):
        return "N/A"

    abs_val = abs(value)
    if abs_val >= 1:
        precision = 2
    elif abs_val >= 0.01:
        precision = 4
    elif abs_val >= 0.0001:
        precision = 6
    else:
        precision = 8

    return f"{value:.{precision}f}"


def format_pct(value: Optional[float], precision: int = 2) -> str:
    """Formats a percentage value, or "N/A" when missing."""
    if value is None or pd.isna(value):
        return "N/A"
    return f"{value:.{precision}f}%"


def extract_dict_from_namespace(namespace, keys: list) -> dict:
    """
    Extract a dictionary from a namespace object using specified keys.

    Args:
        namespace: Namespace object (e.g., from argparse)
        keys: List of attribute names to extract

    Returns:
        Dictionary with extracted key-value pairs
    """
    return {key: getattr(namespace, key, None) for key in keys}


# --- Logging Functions ---
# Organized by severity level and purpose

# Standard severity levels
def log_success(message: str) -> None:
    """Print success message with green color."""
    print(color_text(message, Fore.GREEN))


def log_error(message: str) -> None:
    """Print error message with red color and bright style."""
    print(color_text(message, Fore.RED, Style.BRIGHT))


def log_warn(message: str) -> None:
    """Print warning message with yellow color."""
    print(color_text(message, Fore.YELLOW))


# Domain-specific logging
def log_data(message: str) -> None:
    """Print data-related message with cyan color."""
    print(color_text(message, Fore.CYAN))


def log_analysis(message: str) -> None:
    """Print analysis-related message with magenta color."""
    print(color_text(message, Fore.MAGENTA))


def log_progress(message: str) -> None:
    """Print progress update message with yellow color."""
    print(color_text(message, Fore.YELLOW))
