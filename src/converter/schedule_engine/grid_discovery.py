"""Locate timezone, time and day columns in a loosely structured broadcast grid."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Optional, Sequence

from .models import DayColumn, RawGrid, TimezoneColumn, Weekday
from .time_math import cell_text, is_placeholder, normalize_time

logger = logging.getLogger(__name__)

TIMEZONE_LABELS = ('WAT', 'CAT', 'EAT')

MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

_WORD_RE = re.compile(r'[A-Za-z]+')
_DAY_NUMBER_RE = re.compile(r'\b(\d{1,2})\b')
_DAY_MONTH_RE = re.compile(r'(\d{1,2})-([a-z]{3})')
_YEAR_RE = re.compile(r'\b((?:19|20)\d{2})\b')
_ISO_DATE_RE = re.compile(r'\b(\d{4})-(\d{2})-(\d{2})\b')


@dataclass(frozen=True)
class ScanWindows:
    """Row/column windows searched by the structural heuristics."""
    leading_columns: int = 5  # Columns searched for timezone labels and time columns
    timezone_rows: int = 10  # Rows searched for timezone labels
    time_rows: int = 20  # Rows checked for time values when picking a time column
    header_rows: int = 5  # Rows searched for weekday/date headers
    body_start_row: int = 3  # Body window used to infer header-less day columns
    body_end_row: int = 20


@dataclass
class GridDiscovery:
    """Column layout recovered from a grid."""
    timezone_columns: list[TimezoneColumn] = field(default_factory=list)
    # Timezone column index -> time column index
    time_columns: dict[int, int] = field(default_factory=dict)
    day_columns: list[DayColumn] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)


def extract_weekday(text: str) -> Optional[Weekday]:
    """First word of the text naming a weekday ("Mon", "TUESDAY", "Thurs")."""
    for word in _WORD_RE.findall(text or ''):
        weekday = Weekday.from_string(word)
        if weekday:
            return weekday
    return None


def parse_header_date(value: Any, year: Optional[int] = None) -> Optional[date]:
    """
    Parse a day header into a calendar date.

    Recognised forms are date/datetime cell values, ISO dates, a month name
    with a day number ("Mon 29 Sep", "September 29") and "D-Mon" ("29-Sep").
    A four-digit year in the text wins over the supplied year.

    Args:
        value: Raw header cell value
        year: Year used when the header names none (default: current year)

    Returns:
        date or None if the header holds no valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = cell_text(value).lower()
    if not text:
        return None

    iso = _ISO_DATE_RE.search(text)
    if iso:
        try:
            return date(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))
        except ValueError:
            return None

    month = None
    for name, number in MONTHS.items():
        if name in text:
            month = number
            break

    day = None
    day_match = _DAY_NUMBER_RE.search(text)
    if day_match:
        day = int(day_match.group(1))

    day_month = _DAY_MONTH_RE.search(text)
    if day_month and month is None and day_month.group(2) in MONTHS:
        day = int(day_month.group(1))
        month = MONTHS[day_month.group(2)]

    if month is None or day is None:
        return None

    year_match = _YEAR_RE.search(text)
    if year_match:
        year = int(year_match.group(1))
    elif year is None:
        year = date.today().year

    try:
        return date(year, month, day)
    except ValueError:
        logger.debug("Ignoring impossible header date %r", text)
        return None


def find_timezone_columns(
    grid: RawGrid,
    windows: ScanWindows = ScanWindows(),
    labels: Sequence[str] = TIMEZONE_LABELS,
) -> list[TimezoneColumn]:
    """Scan the leading columns for timezone labels; one label per column."""
    found = []
    for col in range(min(windows.leading_columns, grid.n_cols)):
        for row in range(min(windows.timezone_rows, grid.n_rows)):
            text = cell_text(grid.value(row, col)).upper()
            if text in labels:
                found.append(TimezoneColumn(label=text, column_index=col, row_index=row))
                logger.debug("Found timezone %s at column %d, row %d", text, col, row)
                break
    return found


def first_time_row(grid: RawGrid, col: int, windows: ScanWindows = ScanWindows()) -> Optional[int]:
    """Row of the first time label in a column, within the time window."""
    for row in range(min(windows.time_rows, grid.n_rows)):
        if normalize_time(grid.value(row, col)):
            return row
    return None


def _has_time_values(grid: RawGrid, col: int, windows: ScanWindows) -> bool:
    return first_time_row(grid, col, windows) is not None


def find_time_column(
    grid: RawGrid,
    timezone: TimezoneColumn,
    windows: ScanWindows = ScanWindows(),
) -> Optional[int]:
    """
    Pick the column holding the time labels for a timezone.

    The timezone's own column is preferred; otherwise the first leading
    column with time values is used.
    """
    if _has_time_values(grid, timezone.column_index, windows):
        return timezone.column_index

    for col in range(min(windows.leading_columns, grid.n_cols)):
        if _has_time_values(grid, col, windows):
            logger.debug("Using time column %d for timezone %s", col, timezone.label)
            return col

    return None


def _has_program_content(grid: RawGrid, col: int, windows: ScanWindows) -> bool:
    for row in range(windows.body_start_row, min(windows.body_end_row, grid.n_rows)):
        value = grid.value(row, col)
        text = cell_text(value)
        if text and not is_placeholder(text) and not normalize_time(value):
            return True
    return False


def find_day_columns(
    grid: RawGrid,
    start_col: int,
    windows: ScanWindows = ScanWindows(),
    year: Optional[int] = None,
    header_end_row: Optional[int] = None,
) -> list[DayColumn]:
    """
    Find day columns from start_col to the right edge of the grid.

    A column qualifies through a weekday or date in its header rows; the
    first weekday and the first date found there are kept. The header rows
    end at header_end_row when given (the first timed row), so program
    titles such as "Sunday Best" are never read as headers. A header-less
    column with program content is taken as the next day after the previous
    day column (Monday when it is the first), which models grids spanning
    several weeks.
    """
    days: list[DayColumn] = []

    header_end = min(windows.header_rows, grid.n_rows)
    if header_end_row:
        header_end = min(header_end, header_end_row)

    for col in range(start_col, grid.n_cols):
        weekday = None
        header_date = None

        for row in range(header_end):
            value = grid.value(row, col)
            if weekday is None:
                weekday = extract_weekday(cell_text(value))
            if header_date is None:
                header_date = parse_header_date(value, year)

        if weekday or header_date:
            if weekday is None:
                weekday = Weekday.from_date(header_date)
            days.append(DayColumn(column_index=col, weekday=weekday, header_date=header_date))
            logger.debug("Found day at column %d: %s (%s)", col, weekday.value, header_date)
            continue

        if _has_program_content(grid, col, windows):
            inferred = days[-1].weekday.next() if days else Weekday.MONDAY
            days.append(DayColumn(column_index=col, weekday=inferred, inferred=True))
            logger.debug("Inferred day at column %d: %s", col, inferred.value)

    return days


def resolve_dates(days: list[DayColumn]) -> Optional[int]:
    """
    Assign calendar dates to day columns in place.

    The first column with an explicit header date is the anchor. Columns
    without their own date get the anchor date shifted by their distance
    from the anchor in calendar days. Without an anchor, dates stay unset.

    Returns:
        Position of the anchor column, or None when no header date exists
    """
    anchor_index = next((i for i, d in enumerate(days) if d.header_date), None)

    for i, day in enumerate(days):
        if day.header_date:
            day.calendar_date = day.header_date
        elif anchor_index is not None:
            anchor = days[anchor_index].header_date
            day.calendar_date = anchor + timedelta(days=i - anchor_index)

    return anchor_index


def discover(
    grid: RawGrid,
    windows: ScanWindows = ScanWindows(),
    year: Optional[int] = None,
    timezone_labels: Sequence[str] = TIMEZONE_LABELS,
) -> GridDiscovery:
    """
    Recover the column layout of a broadcast grid.

    Never raises for a well-formed grid; structural problems are reported
    through the issues list and the affected timezone is left out.

    Args:
        grid: Decoded sheet
        windows: Scan windows for the heuristics
        year: Year for day headers without one
        timezone_labels: Closed set of timezone labels to look for

    Returns:
        GridDiscovery with timezone, time and day columns
    """
    result = GridDiscovery()

    result.timezone_columns = find_timezone_columns(grid, windows, timezone_labels)
    if not result.timezone_columns:
        result.issues.append(f"No timezone columns ({'/'.join(timezone_labels)}) found")
        return result

    for tz in result.timezone_columns:
        time_col = find_time_column(grid, tz, windows)
        if time_col is None:
            result.issues.append(f"No time data found for {tz.label}")
            logger.warning("No time column found for timezone %s", tz.label)
            continue
        result.time_columns[tz.column_index] = time_col

    timed_rows = [
        row for row in (first_time_row(grid, col, windows) for col in set(result.time_columns.values()))
        if row is not None
    ]
    header_end_row = min(timed_rows) if timed_rows else None

    start_col = max(tz.column_index for tz in result.timezone_columns) + 1
    result.day_columns = find_day_columns(grid, start_col, windows, year, header_end_row)
    if not result.day_columns:
        result.issues.append("No day columns found")
        return result

    anchor = resolve_dates(result.day_columns)
    if anchor is None:
        logger.warning("No day header carries a date; %d day column(s) stay undated", len(result.day_columns))

    return result
