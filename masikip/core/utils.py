"""
Core Utilities.

Shared utility functions used across the client.
All modules should import utilities from this module.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the client are timezone-naive and assumed to be
    UTC, matching what the backend serializes.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_date(value: datetime) -> str:
    """Short date label for list rows and the editor header."""
    return value.strftime("%m/%d/%Y")


def format_time(value: datetime) -> str:
    """Hour and minute label for list rows."""
    return value.strftime("%H:%M")


def format_timestamp(value: datetime) -> str:
    """Full date and time label, used for deletion banners."""
    return value.strftime("%m/%d/%Y %H:%M:%S")
