"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.core.config import Settings
from app.guests.store import GuestStore
from app.models import FamilyMember, GuestCreate, RsvpStatus
from app.planner import EventPlanner


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="store")
def store_fixture() -> GuestStore:
    """A guest list covering every status."""
    store = GuestStore()
    base = datetime(2026, 5, 1, tzinfo=UTC)
    store.add(
        GuestCreate(
            name="Priya Sharma",
            relation="Family",
            phone="+91 98765 43210",
            status=RsvpStatus.GOING,
            has_plus_one=True,
            plus_one_name="Arjun",
            created_at=base,
        )
    )
    store.add(
        GuestCreate(
            name="bob jones",
            relation="Friend",
            phone="555-0101",
            status=RsvpStatus.PENDING,
            created_at=base + timedelta(days=1),
        )
    )
    store.add(
        GuestCreate(
            name="Carla Diaz",
            relation="Colleague",
            status=RsvpStatus.NOT_GOING,
            created_at=base + timedelta(days=2),
        )
    )
    store.add(
        GuestCreate(
            name="Anil Kapoor",
            created_at=base + timedelta(days=3),
            relation="Family",
            phone="555-0199",
            family_members=[
                FamilyMember(id="f1", name="Meera Kapoor", relation="spouse"),
                FamilyMember(id="f2", name="Rohan Kapoor", relation="child", age=8),
            ],
        )
    )
    return store


@pytest.fixture(name="settings")
def settings_fixture(tmp_path) -> Settings:
    """Settings that keep files inside the test's temporary directory."""
    return Settings(
        _env_file=None,
        log_dir=tmp_path / "logs",
        database_url="sqlite://",
    )


@pytest.fixture(name="planner")
def planner_fixture(settings: Settings) -> EventPlanner:
    """A planner with attending guests, one room and one vehicle."""
    planner = EventPlanner(settings=settings)
    planner.guests.add(GuestCreate(name="John Smith", status=RsvpStatus.GOING))
    planner.guests.add(
        GuestCreate(
            name="Jane Doe",
            status=RsvpStatus.GOING,
            family_members=[
                FamilyMember(id="jd-1", name="Jim Doe", rsvp_status=RsvpStatus.GOING),
                FamilyMember(id="jd-2", name="Jill Doe", rsvp_status=RsvpStatus.PENDING),
            ],
        )
    )
    planner.guests.add(GuestCreate(name="Diana Ross", status=RsvpStatus.PENDING))
    planner.add_room("Deluxe Room", "2", "150", type="double", amenities="WiFi, TV")
    planner.add_vehicle("Shuttle A", 3, type="shuttle")
    return planner
