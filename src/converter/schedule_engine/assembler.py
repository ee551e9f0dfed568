"""Assemble flat output rows from parsed grids and order them by broadcast day."""

import logging
from typing import Optional, Sequence

from .models import ConversionOptions, OutputRow, ParseResult
from .text_parser import parse_program_cell
from .time_math import MINUTES_PER_DAY, is_empty_slot, time_to_minutes

logger = logging.getLogger(__name__)

DEFAULT_DAY_START_HOUR = 5


def broadcast_day_start_hour(rows: Sequence[OutputRow]) -> int:
    """
    Hour at which the broadcast day starts, taken from the first row.

    Rows are expected in grid reading order, so the first row is the first
    slot of the sheet. Without rows the default of 05:00 applies.
    """
    if not rows:
        return DEFAULT_DAY_START_HOUR
    minutes = time_to_minutes(rows[0].start_time)
    if minutes is None:
        return DEFAULT_DAY_START_HOUR
    return minutes // 60


def timezone_rank(timezone: str, timezone_order: Sequence[str]) -> int:
    """Position of the timezone in the requested order; unlisted ones go last."""
    try:
        return list(timezone_order).index(timezone)
    except ValueError:
        return len(timezone_order)


def _broadcast_minutes(label: str, day_start_hour: int) -> int:
    minutes = time_to_minutes(label)
    if minutes is None:
        return 2 * MINUTES_PER_DAY
    if minutes // 60 < day_start_hour:
        return minutes + MINUTES_PER_DAY
    return minutes


def sort_rows(
    rows: Sequence[OutputRow],
    timezone_order: Sequence[str],
    day_start_hour: int = DEFAULT_DAY_START_HOUR,
) -> list[OutputRow]:
    """
    Order rows by date, broadcast-day start time, timezone rank and title.

    Start times before day_start_hour count as belonging to the end of the
    date's broadcast day, so 04:30 sorts after 23:30. The sort is stable.
    """
    return sorted(
        rows,
        key=lambda r: (
            r.date,
            _broadcast_minutes(r.start_time, day_start_hour),
            timezone_rank(r.timezone, timezone_order),
            r.title,
        ),
    )


def assemble(parse_result: ParseResult, options: Optional[ConversionOptions] = None) -> list[OutputRow]:
    """
    Build sorted output rows from a parse result.

    Args:
        parse_result: Timezone blocks produced by parse_grid
        options: Region, colors and timezone ordering (defaults when omitted)

    Returns:
        Output rows in broadcast order
    """
    options = options or ConversionOptions()
    rows: list[OutputRow] = []

    if options.merge_slots:
        logger.debug("merge_slots requested; durations already follow merge spans")

    for block in parse_result.timezone_blocks:
        for programming in block.days:
            if programming.day.calendar_date is None:
                logger.warning("Skipping undated %s (column %d) in %s",
                               programming.day.label, programming.day.column_index, block.timezone)
                continue
            iso = programming.day.calendar_date.isoformat()
            for cell in programming.cells:
                if is_empty_slot(cell.raw_text):
                    continue

                parsed = parse_program_cell(cell.raw_text)
                rows.append(
                    OutputRow(
                        region=options.region,
                        date=iso,
                        start_time=cell.start_time,
                        end_time=cell.end_time or cell.start_time,
                        title=parsed.title,
                        season=parsed.season or "",
                        episode=parsed.episode or "",
                        subtitle=parsed.subtitle or "",
                        text_color=options.text_color,
                        bg_color=options.bg_color,
                        timezone=block.timezone,
                    )
                )

    if options.day_start_hour is not None:
        day_start = options.day_start_hour
    else:
        day_start = broadcast_day_start_hour(rows)
    logger.debug("Sorting %d rows, broadcast day starts at %02d:00, timezone order %s",
                 len(rows), day_start, ", ".join(options.timezone_order))

    return sort_rows(rows, options.timezone_order, day_start)
