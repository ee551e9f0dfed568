from __future__ import annotations

from pathlib import Path

from sqlalchemy.orm import Session

from schedule_engine.database import ScheduledAiring, ScheduleSource, create_tables, get_db_engine, save_rows
from schedule_engine.models import OutputRow


def test_save_rows_keeps_order_and_blank_fields(tmp_path: Path):
    engine = get_db_engine(tmp_path / "schedule.db")
    create_tables(engine)

    rows = [
        OutputRow(region="ROA", date="2025-09-29", start_time="06:00", end_time="06:30", title="News", timezone="WAT"),
        OutputRow(region="ROA", date="2025-09-29", start_time="06:30", end_time="07:30", title="Twist of Fate",
                  season="10", episode="36", subtitle="New Era", timezone="WAT"),
    ]
    first = save_rows(engine, "week40.xlsx", rows)
    second = save_rows(engine, "week41.xlsx", rows[:1])

    assert second == first + 1
    with Session(engine) as session:
        assert session.query(ScheduleSource).count() == 2
        airings = (
            session.query(ScheduledAiring)
            .filter(ScheduledAiring.source_id == first)
            .order_by(ScheduledAiring.position)
            .all()
        )
        assert [a.title for a in airings] == ["News", "Twist of Fate"]
        assert airings[0].season is None
        assert airings[1].episode == "36"
