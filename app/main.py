"""Wedding Planner application bootstrap."""
import logging
from pathlib import Path

from sqlmodel import Session

from app.core.config import Settings, settings
from app.core.database import SnapshotRepository, create_db_and_tables
from app.planner import EventPlanner

logger = logging.getLogger(__name__)


def configure_logging(config: Settings = settings) -> Path:
    """Send log output to ``<log_dir>/latest.log``; returns the file path."""
    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "latest.log"

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=str(log_file),
    )
    return log_file


def load_planner(event_id: str, session: Session, config: Settings = settings) -> EventPlanner:
    """Build a planner from the stored snapshot, or an empty one."""
    snapshot = SnapshotRepository(session).load(event_id)
    if snapshot is None:
        logger.info(f"No saved state for event {event_id}, starting empty")
    return EventPlanner(settings=config, snapshot=snapshot)


def save_planner(event_id: str, planner: EventPlanner, session: Session) -> None:
    SnapshotRepository(session).save(event_id, planner.snapshot())


def startup() -> None:
    """Prepare logging and storage before the first planner is loaded."""
    configure_logging()
    logger.info(f"Starting {settings.app_name}")
    create_db_and_tables()

