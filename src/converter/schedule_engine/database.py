"""Database setup and models for converted schedules."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence, Union

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, create_engine
from sqlalchemy.orm import DeclarativeBase, Session

from .models import OutputRow


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class ScheduleSource(Base):
    """Represents the input grid file source."""
    __tablename__ = "schedule_sources"

    id = Column(Integer, primary_key=True)
    file_path = Column(String(500), nullable=False)
    processed_at = Column(DateTime, nullable=True)


class ScheduledAiring(Base):
    """Represents a single converted row of the schedule."""
    __tablename__ = "scheduled_airings"

    id = Column(Integer, primary_key=True)
    source_id = Column(Integer, ForeignKey("schedule_sources.id"), nullable=False)
    position = Column(Integer, nullable=False)  # Index in the sorted output
    region = Column(String(50), nullable=False)
    date = Column(String(10), nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    title = Column(String(500), nullable=False)
    season = Column(String(10), nullable=True)
    episode = Column(String(10), nullable=True)
    subtitle = Column(String(500), nullable=True)
    text_color = Column(String(20), nullable=True)
    bg_color = Column(String(20), nullable=True)
    timezone = Column(String(10), nullable=False)


def get_db_engine(db_path: Union[str, Path] = "schedule_data.db"):
    """
    Create and return a SQLAlchemy Engine connected to SQLite database.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        sqlalchemy.Engine: Database engine instance
    """
    connection_string = f"sqlite:///{Path(db_path)}"

    return create_engine(connection_string, echo=False)


def create_tables(engine) -> None:
    """
    Create all database tables defined in Base.metadata.

    Args:
        engine: SQLAlchemy Engine instance
    """
    Base.metadata.create_all(engine)


def save_rows(engine, file_path: str, rows: Sequence[OutputRow]) -> int:
    """
    Persist one source file and its rows.

    Args:
        engine: SQLAlchemy Engine instance
        file_path: Source grid file the rows were converted from
        rows: Sorted output rows

    Returns:
        Id of the new schedule source
    """
    with Session(engine) as session:
        source = ScheduleSource(file_path=str(file_path), processed_at=datetime.now(timezone.utc))
        session.add(source)
        session.flush()
        source_id = source.id

        for position, row in enumerate(rows):
            session.add(
                ScheduledAiring(
                    source_id=source_id,
                    position=position,
                    region=row.region,
                    date=row.date,
                    start_time=row.start_time,
                    end_time=row.end_time,
                    title=row.title,
                    season=row.season or None,
                    episode=row.episode or None,
                    subtitle=row.subtitle or None,
                    text_color=row.text_color,
                    bg_color=row.bg_color,
                    timezone=row.timezone,
                )
            )

        session.commit()
        return source_id
