"""Database configuration and snapshot storage for SQLite.

The planner works on in-memory collections. This module is the storage
collaborator behind it: ``SnapshotRepository.load`` and ``save`` read and
write one JSON snapshot per event.

SQLite Configuration Choices:
    - **WAL (Write-Ahead Logging)**: Allows concurrent readers while a
      snapshot is being written.

    - **Foreign Keys**: Enabled on every connection so any tables added
      later get referential integrity without extra setup.

    - **check_same_thread=False**: Lets a session created in one thread be
      used from another, as UI event loops and test runners may do.
"""
import logging
from datetime import UTC, datetime

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings
from app.models.snapshot import PlannerSnapshot, PlannerSnapshotRecord

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """Yield a database session."""
    with Session(engine) as session:
        yield session


class SnapshotRepository:
    """Loads and saves planner snapshots through a session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def load(self, event_id: str) -> PlannerSnapshot | None:
        record = self.session.get(PlannerSnapshotRecord, event_id)
        if record is None:
            return None
        return PlannerSnapshot.model_validate_json(record.payload)

    def save(self, event_id: str, snapshot: PlannerSnapshot) -> PlannerSnapshotRecord:
        """Insert or replace the snapshot stored for ``event_id``."""
        record = self.session.get(PlannerSnapshotRecord, event_id)
        payload = snapshot.model_dump_json()
        if record is None:
            record = PlannerSnapshotRecord(event_id=event_id, payload=payload)
        else:
            record.payload = payload
            record.saved_at = datetime.now(UTC)
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        logger.info(f"Saved snapshot for event {event_id} ({len(payload)} bytes)")
        return record

    def delete(self, event_id: str) -> bool:
        record = self.session.get(PlannerSnapshotRecord, event_id)
        if record is None:
            return False
        self.session.delete(record)
        self.session.commit()
        return True
