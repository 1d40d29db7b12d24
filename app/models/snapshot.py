"""Saved planner state.

This module defines the PlannerSnapshot, a plain copy of everything the
planner holds for one event, and the table row it is stored in. The row
keeps the snapshot as a single JSON document; nothing queries inside it.
"""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel

from app.models.budget import BudgetItem
from app.models.guest import Guest
from app.models.resource import Room, Table, Vehicle
from app.models.transport import TransportRoute


class PlannerSnapshot(SQLModel):
    """Everything needed to rebuild an ``EventPlanner``."""

    guests: list[Guest] = Field(default_factory=list)
    rooms: list[Room] = Field(default_factory=list)
    vehicles: list[Vehicle] = Field(default_factory=list)
    tables: list[Table] = Field(default_factory=list)
    routes: list[TransportRoute] = Field(default_factory=list)
    budget_items: list[BudgetItem] = Field(default_factory=list)


class PlannerSnapshotRecord(SQLModel, table=True):
    """A stored snapshot, one per event.

    Attributes:
        event_id: Identifier of the event the snapshot belongs to.
        payload: The snapshot serialised as JSON.
        saved_at: When the snapshot was last written.
    """
    event_id: str = Field(primary_key=True)
    payload: str
    saved_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
