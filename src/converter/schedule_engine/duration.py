"""Derive program durations from the merge spans of a broadcast grid."""

import logging
from typing import Sequence

import numpy as np

from .models import DayColumn, ProgramCell, RawGrid
from .time_math import MINUTES_PER_DAY, add_minutes, cell_text, is_empty_slot, normalize_time, time_to_minutes

logger = logging.getLogger(__name__)

DEFAULT_SLOT_MINUTES = 30


def collect_time_labels(grid: RawGrid, time_column: int) -> list[str]:
    """Canonical time labels down the time column, top to bottom."""
    labels = []
    for row in range(grid.n_rows):
        label = normalize_time(grid.value(row, time_column))
        if label:
            labels.append(label)
    return labels


def infer_slot_duration(time_labels: Sequence[str]) -> int:
    """
    Nominal slot length in minutes: the most frequent gap between labels.

    A decreasing pair wraps past midnight. Equally frequent gaps resolve to
    the largest one; fewer than two labels give the 30 minute default.
    """
    minutes = [time_to_minutes(label) for label in time_labels]
    minutes = [m for m in minutes if m is not None]
    if len(minutes) < 2:
        return DEFAULT_SLOT_MINUTES

    diffs = np.diff(np.array(minutes, dtype=int)) % MINUTES_PER_DAY
    values, counts = np.unique(diffs, return_counts=True)
    modal = values[counts == counts.max()].max()

    return int(modal)


def analyze(
    grid: RawGrid,
    time_column: int,
    day_column: DayColumn,
    slot_minutes: int,
) -> list[ProgramCell]:
    """
    Extract the program cells of one day column.

    A row with a time label and a non-empty, non-placeholder day cell starts a
    program lasting (merge row span x slot length). Rows covered by the merge
    are consumed so a merged cell yields a single program.

    Args:
        grid: Decoded sheet with merge metadata
        time_column: Column holding the time labels
        day_column: Day column to read
        slot_minutes: Nominal slot length in minutes

    Returns:
        Program cells in row order
    """
    col = day_column.column_index
    cells: list[ProgramCell] = []
    consumed: set[int] = set()

    for row in range(grid.n_rows):
        if row in consumed:
            continue

        start = normalize_time(grid.value(row, time_column))
        if not start:
            continue

        value = grid.value(row, col)
        if is_empty_slot(value):
            continue

        span = grid.row_span(row, col)
        consumed.update(range(row, row + span))

        duration = span * slot_minutes
        cell = ProgramCell(
            start_time=start,
            end_time=add_minutes(start, duration),
            raw_text=cell_text(value),
            source_row=row,
        )
        cells.append(cell)
        logger.debug("%s: %s (%d min, spans %d rows)", day_column.label, cell, duration, span)

    return cells
