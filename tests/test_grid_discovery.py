from __future__ import annotations

from datetime import date, datetime

from conftest import make_grid
from schedule_engine.grid_discovery import (
    ScanWindows,
    discover,
    extract_weekday,
    find_time_column,
    first_time_row,
    find_timezone_columns,
    parse_header_date,
    resolve_dates,
)
from schedule_engine.models import DayColumn, TimezoneColumn, Weekday


def test_extract_weekday():
    assert extract_weekday("Mon 29 Sep") is Weekday.MONDAY
    assert extract_weekday("THURSDAY") is Weekday.THURSDAY
    assert extract_weekday("tues.") is Weekday.TUESDAY
    assert extract_weekday("Sunrise Show") is None
    assert extract_weekday("") is None


def test_parse_header_date_forms():
    assert parse_header_date("29-Sep", 2025) == date(2025, 9, 29)
    assert parse_header_date("Mon 29 Sep", 2025) == date(2025, 9, 29)
    assert parse_header_date("Wed 1 Oct", 2024) == date(2024, 10, 1)
    assert parse_header_date("September 30, 2025", 2020) == date(2025, 9, 30)
    assert parse_header_date("2025-10-01") == date(2025, 10, 1)
    assert parse_header_date(datetime(2025, 10, 2, 0, 0)) == date(2025, 10, 2)
    assert parse_header_date(date(2025, 10, 3)) == date(2025, 10, 3)


def test_parse_header_date_rejects_non_dates():
    assert parse_header_date("31 Feb", 2025) is None
    assert parse_header_date("Mon", 2025) is None
    assert parse_header_date("Sep", 2025) is None
    assert parse_header_date(None, 2025) is None
    assert parse_header_date("Morning News", 2025) is None


def test_parse_header_date_defaults_to_current_year():
    assert parse_header_date("29-Sep") == date(date.today().year, 9, 29)


def test_timezone_columns(sample_grid):
    found = find_timezone_columns(sample_grid)
    assert [(tz.label, tz.column_index) for tz in found] == [("WAT", 0), ("CAT", 1)]


def test_timezone_labels_outside_window_are_ignored():
    rows = [["", "", "", "", "", "WAT"], ["06:00", "", "", "", "", ""]]
    assert find_timezone_columns(make_grid(rows)) == []
    wide = ScanWindows(leading_columns=6)
    assert [tz.label for tz in find_timezone_columns(make_grid(rows), wide)] == ["WAT"]


def test_timezone_label_match_is_case_and_space_insensitive():
    rows = [["  eat "], ["06:00"]]
    assert [tz.label for tz in find_timezone_columns(make_grid(rows))] == ["EAT"]


def test_time_column_prefers_timezone_column(sample_grid):
    assert find_time_column(sample_grid, TimezoneColumn("CAT", 1)) == 1


def test_time_column_falls_back_to_leading_column():
    rows = [
        ["Time", "WAT", "Mon 29 Sep"],
        ["06:00", None, "News"],
        ["06:30", None, "Cartoons"],
    ]
    layout = discover(make_grid(rows), year=2025)
    assert layout.time_columns == {1: 0}
    assert [d.column_index for d in layout.day_columns] == [2]


def test_missing_time_column_is_an_issue():
    rows = [["WAT", "Mon 29 Sep"], ["", "News"]]
    layout = discover(make_grid(rows), year=2025)
    assert layout.time_columns == {}
    assert "No time data found for WAT" in layout.issues


def test_no_timezone_is_an_issue():
    rows = [["Time", "Mon"], ["06:00", "News"]]
    layout = discover(make_grid(rows))
    assert layout.timezone_columns == []
    assert layout.issues == ["No timezone columns (WAT/CAT/EAT) found"]


def test_day_columns_from_headers(sample_grid):
    layout = discover(sample_grid, year=2025)
    days = layout.day_columns
    assert [d.column_index for d in days] == [2, 3, 4]
    assert [d.weekday for d in days] == [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY]
    assert [d.calendar_date for d in days] == [date(2025, 9, 29), date(2025, 9, 30), date(2025, 10, 1)]
    assert not any(d.inferred for d in days)
    assert layout.issues == []


def test_inferred_columns_advance_weekday_cyclically():
    rows = [
        ["WAT", "Sat", None, None, None],
        [None, "4-Oct", None, None, None],
        ["06:00", "Football", None, None, None],
        ["06:30", "Football", "Cartoons", None, "Kids Club"],
        ["07:00", "Late Movie", "Cartoons", None, "Kids Club"],
    ]
    days = discover(make_grid(rows), year=2025).day_columns
    assert [d.column_index for d in days] == [1, 2, 4]
    assert [d.weekday for d in days] == [Weekday.SATURDAY, Weekday.SUNDAY, Weekday.MONDAY]
    assert [d.inferred for d in days] == [False, True, True]
    # Dates follow column position, not the weekday labels
    assert [d.calendar_date for d in days] == [date(2025, 10, 4), date(2025, 10, 5), date(2025, 10, 6)]


def test_placeholder_and_time_only_columns_are_not_days():
    rows = [
        ["WAT", None, None],
        [None, None, None],
        ["06:00", "—", "06:00"],
        ["06:30", "-", "06:30"],
        ["07:00", "–", "07:00"],
    ]
    assert discover(make_grid(rows)).day_columns == []


def test_first_inferred_column_defaults_to_monday_without_date():
    rows = [
        ["WAT", None],
        [None, None],
        ["06:00", None],
        ["06:30", "News"],
    ]
    days = discover(make_grid(rows)).day_columns
    assert len(days) == 1
    assert days[0].weekday is Weekday.MONDAY
    assert days[0].inferred
    assert days[0].calendar_date is None


def test_date_only_header_supplies_weekday():
    rows = [
        ["WAT", "1-Oct", None],
        ["06:00", "News", None],
        ["06:30", "News", None],
        ["07:00", "News", "Movie"],
    ]
    days = discover(make_grid(rows), year=2025).day_columns
    assert [d.weekday for d in days] == [Weekday.WEDNESDAY, Weekday.THURSDAY]
    assert days[1].calendar_date == date(2025, 10, 2)


def test_resolve_dates_before_and_after_anchor():
    days = [
        DayColumn(column_index=2, weekday=Weekday.MONDAY),
        DayColumn(column_index=3, weekday=Weekday.TUESDAY, header_date=date(2025, 9, 30)),
        DayColumn(column_index=4, weekday=Weekday.FRIDAY),
        DayColumn(column_index=5, weekday=Weekday.SUNDAY, header_date=date(2025, 12, 25)),
    ]
    assert resolve_dates(days) == 1
    assert [d.calendar_date for d in days] == [
        date(2025, 9, 29),
        date(2025, 9, 30),
        date(2025, 10, 1),
        date(2025, 12, 25),
    ]


def test_resolve_dates_without_anchor():
    days = [DayColumn(column_index=1, weekday=Weekday.MONDAY)]
    assert resolve_dates(days) is None
    assert days[0].calendar_date is None


def test_discover_never_raises_on_ragged_or_empty_grids():
    assert discover(make_grid([])).issues
    assert discover(make_grid([[], ["WAT"], []])).issues == ["No time data found for WAT", "No day columns found"]


def test_repeated_timezone_labels_keep_their_own_time_columns():
    rows = [
        ["WAT", "WAT", "Mon 29 Sep"],
        ["06:00", "08:00", "News"],
        ["06:30", "08:30", "Talk"],
    ]
    layout = discover(make_grid(rows), year=2025)
    assert [(tz.label, tz.column_index) for tz in layout.timezone_columns] == [("WAT", 0), ("WAT", 1)]
    assert layout.time_columns == {0: 0, 1: 1}


def test_program_text_below_headers_does_not_replace_them():
    rows = [
        ["WAT", "Mon", "Tue"],
        [None, "29-Sep", None],
        ["06:00", "Morning News", "Morning News"],
        ["06:30", "Mark Angel Comedy S2 EP 12", "Cartoons"],
        ["07:00", "Sunday Best", "Sunday Best"],
    ]
    days = discover(make_grid(rows), year=2025).day_columns
    assert [d.weekday for d in days] == [Weekday.MONDAY, Weekday.TUESDAY]
    assert [d.header_date for d in days] == [date(2025, 9, 29), None]
    assert [d.calendar_date for d in days] == [date(2025, 9, 29), date(2025, 9, 30)]
    assert not any(d.inferred for d in days)


def test_first_header_match_wins_within_header_rows():
    rows = [
        ["WAT", "Wed", None],
        [None, "1-Oct", None],
        [None, "Thu 2 Oct", None],
        ["06:00", "News", "News"],
    ]
    days = discover(make_grid(rows), year=2025).day_columns
    assert days[0].weekday is Weekday.WEDNESDAY
    assert days[0].header_date == date(2025, 10, 1)
    assert [d.calendar_date for d in days] == [date(2025, 10, 1), date(2025, 10, 2)]


def test_first_time_row():
    rows = [["WAT"], ["Time"], ["06:00"], ["06:30"]]
    assert first_time_row(make_grid(rows), 0) == 2
    assert first_time_row(make_grid([["WAT"], ["News"]]), 0) is None
