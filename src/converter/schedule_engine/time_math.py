"""Time label normalization and clock arithmetic for HH:MM labels."""

import logging
import re
from datetime import date, datetime, time
from typing import Any, Optional

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

# Cell values conventionally meaning "no program": em dash, hyphen, en dash
PLACEHOLDER_MARKERS = frozenset({'—', '-', '–'})

_CLOCK_RE = re.compile(
    r'^(\d{1,2}):(\d{2})(?::(\d{2}))?(?:\s*([AaPp])\.?\s*[Mm]\.?)?$'
)
_CANONICAL_RE = re.compile(r'^(\d{1,2}):(\d{2})$')

# The general parser accepts bare dates and month names too ("Sep", "29-Sep"),
# so it is only consulted for text that carries a clock reading.
_TIME_HINT_RE = re.compile(r'\d\s*(?::|[AaPp]\.?\s*[Mm]\b)')


def _fmt(hours: int, minutes: int) -> str:
    return f"{hours:02d}:{minutes:02d}"


def cell_text(value: Any) -> str:
    """Stringify a raw cell value and strip surrounding whitespace."""
    if value is None:
        return ""
    return str(value).strip()


def is_placeholder(text: str) -> bool:
    return text.strip() in PLACEHOLDER_MARKERS


def is_empty_slot(value: Any) -> bool:
    """True for cells that carry no program: blank or a placeholder marker."""
    text = cell_text(value)
    return not text or is_placeholder(text)


def normalize_time(value: Any) -> Optional[str]:
    """
    Convert a time-like cell value into a canonical 24-hour "HH:MM" label.

    Accepts datetime/time values and strings such as "6:00", "06:00:00",
    "6:00 PM" or "2025-09-29 06:30". Anything else yields None, which callers
    read as "not a time cell".

    Args:
        value: Raw cell value

    Returns:
        "HH:MM" string or None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _fmt(value.hour, value.minute)
    if isinstance(value, time):
        return _fmt(value.hour, value.minute)
    if isinstance(value, date):
        return None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    match = _CLOCK_RE.match(text)
    if match:
        hours = int(match.group(1))
        minutes = int(match.group(2))
        seconds = int(match.group(3) or 0)
        meridiem = match.group(4)

        if minutes > 59 or seconds > 59:
            return None

        if meridiem:
            if not 1 <= hours <= 12:
                return None
            if meridiem.upper() == 'P' and hours < 12:
                hours += 12
            elif meridiem.upper() == 'A' and hours == 12:
                hours = 0
        elif hours > 23:
            return None

        return _fmt(hours, minutes)

    if not _TIME_HINT_RE.search(text):
        return None

    try:
        parsed = date_parser.parse(text)
    except (ValueError, OverflowError) as e:
        logger.debug("normalize_time: could not parse %r: %s", text, e)
        return None

    return _fmt(parsed.hour, parsed.minute)


def time_to_minutes(label: str) -> Optional[int]:
    """Minutes since midnight for an "H:MM"/"HH:MM" label, or None."""
    if not label:
        return None
    match = _CANONICAL_RE.match(label.strip())
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def add_minutes(label: str, minutes: int) -> str:
    """
    Advance an "HH:MM" label by a number of minutes, wrapping around midnight.

    Negative offsets and offsets beyond a day wrap modulo 1440. A label that
    is not a clock reading is returned unchanged.
    """
    start = time_to_minutes(label)
    if start is None:
        return label

    total = (start + minutes) % MINUTES_PER_DAY
    return _fmt(total // 60, total % 60)
