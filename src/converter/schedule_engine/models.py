"""Data models for broadcast grid conversion."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional
from enum import Enum


class Weekday(Enum):
    """Enumeration for days of the week, valued by their grid abbreviation."""
    MONDAY = "Mon"
    TUESDAY = "Tue"
    WEDNESDAY = "Wed"
    THURSDAY = "Thu"
    FRIDAY = "Fri"
    SATURDAY = "Sat"
    SUNDAY = "Sun"

    @classmethod
    def from_string(cls, day_str: str) -> Optional['Weekday']:
        """
        Parse weekday from various string formats.

        Args:
            day_str: String representation of weekday (e.g., "Mon", "Monday", "THURS")

        Returns:
            Weekday enum or None if not matched
        """
        if not day_str or not isinstance(day_str, str):
            return None

        day_str = day_str.strip().upper()

        if not day_str:
            return None

        day_mapping = {
            'MON': cls.MONDAY, 'MONDAY': cls.MONDAY,
            'TUE': cls.TUESDAY, 'TUES': cls.TUESDAY, 'TUESDAY': cls.TUESDAY,
            'WED': cls.WEDNESDAY, 'WEDNESDAY': cls.WEDNESDAY,
            'THU': cls.THURSDAY, 'THUR': cls.THURSDAY, 'THURS': cls.THURSDAY, 'THURSDAY': cls.THURSDAY,
            'FRI': cls.FRIDAY, 'FRIDAY': cls.FRIDAY,
            'SAT': cls.SATURDAY, 'SATURDAY': cls.SATURDAY,
            'SUN': cls.SUNDAY, 'SUNDAY': cls.SUNDAY,
        }

        return day_mapping.get(day_str)

    @classmethod
    def from_date(cls, value: date) -> 'Weekday':
        return list(cls)[value.weekday()]

    def next(self) -> 'Weekday':
        """Following day, wrapping Sunday back to Monday."""
        days = list(Weekday)
        return days[(days.index(self) + 1) % len(days)]


@dataclass(frozen=True)
class MergeRange:
    """A rectangular merged region, 0-based and inclusive on both ends."""
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    @property
    def row_span(self) -> int:
        return self.end_row - self.start_row + 1


@dataclass
class RawGrid:
    """
    One decoded spreadsheet sheet.

    Cells are stored row-major; rows may be ragged. Merged regions keep their
    value in the top-left cell, the other covered cells are empty.
    """
    cells: list[list[Any]] = field(default_factory=list)
    merges: list[MergeRange] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._spans = {(m.start_row, m.start_col): m.row_span for m in self.merges}

    @property
    def n_rows(self) -> int:
        return len(self.cells)

    @property
    def n_cols(self) -> int:
        return max((len(row) for row in self.cells), default=0)

    def value(self, row: int, col: int) -> Any:
        """Cell value at (row, col), or None when outside the grid."""
        if row < 0 or col < 0 or row >= len(self.cells):
            return None
        cells = self.cells[row]
        if col >= len(cells):
            return None
        return cells[col]

    def row_span(self, row: int, col: int) -> int:
        """Rows covered by the merge anchored at (row, col); 1 when unmerged."""
        return self._spans.get((row, col), 1)

    def is_empty(self) -> bool:
        return not any(v is not None and str(v).strip() for row in self.cells for v in row)


@dataclass(frozen=True)
class TimezoneColumn:
    """A timezone label found in the leading columns of the grid."""
    label: str
    column_index: int
    row_index: int = 0


@dataclass
class DayColumn:
    """A grid column carrying one calendar day of programming."""
    column_index: int
    weekday: Optional[Weekday] = None
    header_date: Optional[date] = None  # Explicit date read from the header rows
    calendar_date: Optional[date] = None  # Resolved date (explicit or anchor-derived)
    inferred: bool = False  # True when detected from body content rather than a header

    @property
    def label(self) -> str:
        return self.weekday.value if self.weekday else "?"

    def __str__(self) -> str:
        iso = self.calendar_date.isoformat() if self.calendar_date else "no date"
        return f"{self.label} (column {self.column_index}, {iso})"


@dataclass(frozen=True)
class ProgramCell:
    """One airing derived from a single (possibly merged) grid cell."""
    start_time: str  # HH:MM
    end_time: str  # HH:MM, may be smaller than start_time past midnight
    raw_text: str
    source_row: int

    def __str__(self) -> str:
        return f"{self.start_time}-{self.end_time} {self.raw_text}"


@dataclass
class ParsedProgram:
    """Structured fields parsed from free program text."""
    title: str = ""
    season: Optional[str] = None
    episode: Optional[str] = None
    subtitle: Optional[str] = None


@dataclass
class DayProgramming:
    """Program cells of one day column inside a timezone block."""
    day: DayColumn
    cells: list[ProgramCell] = field(default_factory=list)


@dataclass
class TimezoneBlock:
    """All days and program cells associated with one timezone label."""
    timezone: str
    time_column: int
    slot_minutes: int
    days: list[DayProgramming] = field(default_factory=list)

    def __len__(self) -> int:
        return sum(len(d.cells) for d in self.days)


@dataclass
class ParseResult:
    """Structure recovered from one grid plus the diagnostics collected on the way."""
    timezone_blocks: list[TimezoneBlock] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)


@dataclass
class ConversionOptions:
    """Caller-supplied display attributes and ordering for output rows."""
    region: str = "ROA"
    timezone_order: list[str] = field(default_factory=lambda: ["WAT", "CAT"])
    text_color: str = "#FFFFFF"
    bg_color: str = "#1A1A1A"
    merge_slots: bool = True  # Kept for interface stability; merge spans already give durations
    day_start_hour: Optional[int] = None  # Broadcast day boundary; None derives it from the first row
    year: Optional[int] = None  # Year for headers that carry none; None means the current year


OUTPUT_COLUMNS = (
    "Region",
    "Date",
    "Start Time",
    "End Time",
    "Title",
    "Season",
    "Episode",
    "Subtitle",
    "Text Color",
    "BG Color",
    "Timezone",
)


@dataclass
class OutputRow:
    """Represents a single program airing in the flat schedule."""
    region: str
    date: str  # ISO YYYY-MM-DD
    start_time: str
    end_time: str
    title: str
    season: str = ""
    episode: str = ""
    subtitle: str = ""
    text_color: str = ""
    bg_color: str = ""
    timezone: str = ""

    def to_dict(self) -> dict[str, str]:
        """Row keyed by the external column names, in export order."""
        values = (
            self.region, self.date, self.start_time, self.end_time, self.title,
            self.season, self.episode, self.subtitle, self.text_color,
            self.bg_color, self.timezone,
        )
        return dict(zip(OUTPUT_COLUMNS, values))

    def __str__(self) -> str:
        return f"{self.date} {self.start_time}-{self.end_time} [{self.timezone}] {self.title}"


@dataclass
class ConversionResult:
    """Rows and issues produced for one file or a batch of files."""
    rows: list[OutputRow] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    def extend(self, other: 'ConversionResult') -> None:
        self.rows.extend(other.rows)
        self.issues.extend(other.issues)

    def __len__(self) -> int:
        return len(self.rows)
