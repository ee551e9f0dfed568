"""Turn a decoded broadcast grid into timezone blocks of program cells."""

import logging
from typing import Optional

from .duration import analyze, collect_time_labels, infer_slot_duration
from .grid_discovery import ScanWindows, discover
from .models import DayProgramming, ParseResult, RawGrid, TimezoneBlock

logger = logging.getLogger(__name__)


def parse_grid(
    grid: RawGrid,
    windows: ScanWindows = ScanWindows(),
    year: Optional[int] = None,
) -> ParseResult:
    """
    Parse one sheet into timezone blocks.

    Structure discovery runs first; each timezone with a time column then
    becomes a block whose dated day columns are read by the duration
    analyzer. Problems never abort the parse, they are collected as issues.

    Args:
        grid: Decoded sheet with merge metadata
        windows: Scan windows for structure discovery
        year: Year for day headers without one

    Returns:
        ParseResult with the blocks found and the issues met
    """
    result = ParseResult()

    if grid.is_empty():
        result.issues.append("Sheet is empty")
        return result

    logger.debug("Parsing grid: %d rows x %d columns", grid.n_rows, grid.n_cols)

    layout = discover(grid, windows=windows, year=year)
    result.issues.extend(layout.issues)

    for tz in layout.timezone_columns:
        time_col = layout.time_columns.get(tz.column_index)
        if time_col is None:
            continue

        labels = collect_time_labels(grid, time_col)
        slot_minutes = infer_slot_duration(labels)
        logger.debug("%s: %d time labels, %d minute slots", tz.label, len(labels), slot_minutes)

        block = TimezoneBlock(timezone=tz.label, time_column=time_col, slot_minutes=slot_minutes)

        for day in layout.day_columns:
            if day.calendar_date is None:
                result.issues.append(
                    f"Could not determine date for {day.label} (column {day.column_index}) in {tz.label}"
                )
                continue

            cells = analyze(grid, time_col, day, slot_minutes)
            block.days.append(DayProgramming(day=day, cells=cells))

        logger.debug("%s: %d days, %d programs", tz.label, len(block.days), len(block))
        result.timezone_blocks.append(block)

    if result.issues:
        logger.warning("Grid parsed with %d issue(s): %s", len(result.issues), "; ".join(result.issues))

    return result
