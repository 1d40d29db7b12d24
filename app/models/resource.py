"""Capacity-bounded resources guests can be assigned to.

Rooms, vehicles and reception tables share one shape: a capacity, the ids of the people
assigned to it and the number of free places left. The allocation engine
in ``app.allocation.engine`` is the only code that changes assignments.
"""

from typing import ClassVar

from pydantic import model_validator
from sqlmodel import Field, SQLModel

from app.models.common import new_id, unique_ids
from app.models.enums import ResourceKind, RoomType, TableShape, VehicleType


class Resource(SQLModel):
    """A container with a fixed number of places.

    Attributes:
        id: Opaque unique identifier.
        name: Display name.
        type: Kind-specific subtype (room type, vehicle type).
        capacity: Number of places, at least 1.
        available: Free places. Always ``capacity - len(assigned_person_ids)``.
        assigned_person_ids: Ids of the guests or family members assigned
            here, unique and in assignment order.
        version: Incremented on every assign/unassign; callers may pass it
            back as ``expected_version`` to detect concurrent edits.
    """

    kind: ClassVar[ResourceKind]

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    type: str
    capacity: int = Field(ge=1)
    available: int = 0
    assigned_person_ids: list[str] = Field(default_factory=list)
    version: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_capacity(self) -> "Resource":
        self.assigned_person_ids = unique_ids(self.assigned_person_ids)
        if len(self.assigned_person_ids) > self.capacity:
            raise ValueError(
                f"{len(self.assigned_person_ids)} people assigned to "
                f"{self.name!r} with capacity {self.capacity}"
            )
        self.available = self.capacity - len(self.assigned_person_ids)
        return self

    @property
    def is_full(self) -> bool:
        return self.available <= 0

    def holds(self, person_id: str) -> bool:
        return person_id in self.assigned_person_ids


class Room(Resource):
    """A hotel room offered to guests.

    Attributes:
        price_per_night: Nightly rate, not negative.
        amenities: Free-form amenity labels (WiFi, TV, ...).
    """

    kind: ClassVar[ResourceKind] = ResourceKind.ROOM

    type: RoomType = Field(default=RoomType.SINGLE)
    price_per_night: float = Field(default=0, ge=0)
    amenities: list[str] = Field(default_factory=list)


class Vehicle(Resource):
    """A vehicle transporting guests."""

    kind: ClassVar[ResourceKind] = ResourceKind.VEHICLE

    type: VehicleType = Field(default=VehicleType.CAR)


class Table(Resource):
    """A reception table; each place is one seat."""

    kind: ClassVar[ResourceKind] = ResourceKind.TABLE

    type: TableShape = Field(default=TableShape.CIRCLE)

    @property
    def seated_count(self) -> int:
        return len(self.assigned_person_ids)


class TableTemplate(SQLModel):
    """A preset offered when adding a table."""

    type: TableShape
    name: str
    capacity: int = Field(ge=1)


TABLE_TEMPLATES: list[TableTemplate] = [
    TableTemplate(type=TableShape.RECTANGLE, name="Head Table", capacity=12),
    TableTemplate(type=TableShape.CIRCLE, name="Round Table", capacity=8),
    TableTemplate(type=TableShape.CIRCLE, name="Round Table", capacity=10),
]


class SeatingGroup(SQLModel):
    """People who are seated together, usually a guest and their family.

    Attributes:
        id: The id of the guest the group is built from.
        name: Display name, the guest's relation or "Group".
        person_ids: Ids of everyone in the group, guest first.
    """

    id: str
    name: str
    person_ids: list[str] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.person_ids)


class ResourceOverview(SQLModel):
    """Header figures for a list of resources of one kind.

    ``open_value`` is only meaningful for rooms: the nightly value of the
    places still free.
    """

    total: int = 0
    with_space: int = 0
    open_places: int = 0
    assigned: int = 0
    open_value: float = 0
