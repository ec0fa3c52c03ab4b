"""Formatting helpers for the command-line interface."""

from datetime import datetime


def format_size(size_bytes: int) -> str:
    """Format size in human-readable format."""
    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f}KB"
    else:
        return f"{size_bytes / (1024 * 1024):.0f}MB"


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as local time, second precision."""
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")
