"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging
from datetime import date


def setup_logging(level: int = logging.INFO) -> None:
    """Configure standard logging format for CLI tools."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def parse_date(value: str, field_name: str = "date") -> date:
    """Parse a date string for argparse arguments.

    Args:
        value: Date string in YYYY-MM-DD format.
        field_name: Name of the field for error messages.

    Returns:
        Parsed date object.

    Raises:
        argparse.ArgumentTypeError: If the value is not a valid date.
    """
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{field_name} must be YYYY-MM-DD") from exc


def positive_int(value: str) -> int:
    """Parse a strictly positive integer for argparse arguments."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"{value!r} must be >= 1")
    return parsed
