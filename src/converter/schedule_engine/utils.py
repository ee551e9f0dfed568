"""Validation and utility functions for schedule conversion."""

from collections import Counter
from pathlib import Path
from typing import Sequence

from .models import OutputRow

SUPPORTED_EXTENSIONS = {'.xlsx', '.xlsm', '.csv'}


def validate_rows(rows: Sequence[OutputRow]) -> list[str]:
    """
    Check converted rows and return warnings.

    Warnings point at data worth a second look; they never stop a conversion.

    Args:
        rows: Output rows to check

    Returns:
        List of validation warning messages
    """
    warnings = []

    if not rows:
        warnings.append("No schedule rows were produced")
        return warnings

    untitled = sum(1 for r in rows if not r.title)
    if untitled > 0:
        warnings.append(f"{untitled} rows have an empty title")

    zero_length = sum(1 for r in rows if r.start_time == r.end_time)
    if zero_length > 0:
        warnings.append(f"{zero_length} rows end at their start time")

    keys = Counter((r.timezone, r.date, r.start_time) for r in rows)
    overlapping = sum(n for n in keys.values() if n > 1)
    if overlapping > 0:
        warnings.append(f"{overlapping} rows share a timezone, date and start time")

    return warnings


def format_schedule_report(rows: Sequence[OutputRow]) -> str:
    """
    Summarise rows per timezone and date.

    Args:
        rows: Output rows to summarise

    Returns:
        Formatted report string
    """
    if not rows:
        return "No rows to report"

    per_timezone = Counter(r.timezone for r in rows)
    dates = sorted({r.date for r in rows})

    lines = [f"Schedule Report: {len(rows)} rows, {dates[0]} to {dates[-1]}"]
    for tz, count in per_timezone.items():
        lines.append(f"  {tz}: {count} rows")
        per_date = Counter(r.date for r in rows if r.timezone == tz)
        for day in sorted(per_date):
            lines.append(f"    {day}: {per_date[day]}")

    return "\n".join(lines)


def is_supported_file(file_path: str) -> bool:
    """
    Quick check if file is supported.

    Args:
        file_path: Path to check

    Returns:
        True if file extension is supported
    """
    return Path(file_path).suffix.lower() in SUPPORTED_EXTENSIONS
