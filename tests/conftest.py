from __future__ import annotations

import sys
from pathlib import Path

import openpyxl
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src" / "converter"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from schedule_engine.models import MergeRange, RawGrid  # noqa: E402


TWIST = "Twist of Fate: New Era\nSeason S10 • Episode EP 36"

# Two timezones sharing three day columns; only Monday carries a date.
SAMPLE_ROWS = [
    ["WAT", "CAT", "Mon", "Tue", "Wed"],
    [None, None, "29-Sep", None, None],
    ["06:00", "05:00", "Morning News", "Morning News", "—"],
    ["06:30", "05:30", TWIST, "Cartoons", None],
    ["07:00", "06:00", None, "Hidden Intentions S1 EP 20", "Movie"],
    ["07:30", "06:30", "Talk", "-", None],
]
# Twist of Fate covers 06:30-07:30 on Monday, Movie covers 07:00-08:00 on Wednesday
SAMPLE_MERGES = [(3, 2, 4, 2), (4, 4, 5, 4)]


def make_grid(rows, merges=()) -> RawGrid:
    return RawGrid(
        cells=[list(r) for r in rows],
        merges=[MergeRange(*m) for m in merges],
    )


@pytest.fixture
def sample_grid() -> RawGrid:
    return make_grid(SAMPLE_ROWS, SAMPLE_MERGES)


@pytest.fixture
def sample_xlsx(tmp_path: Path) -> Path:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Grid"
    for row in SAMPLE_ROWS:
        ws.append(row)
    for start_row, start_col, end_row, end_col in SAMPLE_MERGES:
        ws.merge_cells(
            start_row=start_row + 1,
            start_column=start_col + 1,
            end_row=end_row + 1,
            end_column=end_col + 1,
        )
    path = tmp_path / "fpc_week.xlsx"
    wb.save(path)
    return path
