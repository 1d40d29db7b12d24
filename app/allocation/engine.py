"""Assignment of people to rooms, vehicles and reception tables.

One ``ResourceAllocator`` handles one kind of resource; every kind follows
exactly the same rules. Tables additionally seat whole groups at once. After every call that changes a resource,
``available == capacity - len(assigned_person_ids)`` and no resource ever
holds more people than its capacity.
"""
import logging
import math
from collections.abc import Iterable, Sequence
from typing import Any

from app.core.errors import ErrorCode, OperationResult, PlannerError
from app.models import (
    Guest,
    Person,
    Resource,
    ResourceKind,
    ResourceOverview,
    Room,
    RoomType,
    RsvpStatus,
    SeatingGroup,
    Table,
    TableShape,
    TransportRoute,
    Vehicle,
    VehicleType,
)
from app.models.common import unique_ids

logger = logging.getLogger(__name__)

RESOURCE_CLASSES: dict[ResourceKind, type[Resource]] = {
    ResourceKind.ROOM: Room,
    ResourceKind.VEHICLE: Vehicle,
    ResourceKind.TABLE: Table,
}

RESOURCE_TYPES: dict[ResourceKind, type] = {
    ResourceKind.ROOM: RoomType,
    ResourceKind.VEHICLE: VehicleType,
    ResourceKind.TABLE: TableShape,
}


def _parse_int(value: Any) -> int | None:
    """Parse a whole number from form input; None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _parse_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_amenities(amenities: str | Iterable[str] | None) -> list[str]:
    """Accept a comma separated string or a list; trim and drop blanks."""
    if amenities is None:
        return []
    parts = amenities.split(",") if isinstance(amenities, str) else amenities
    return [a.strip() for a in parts if a and a.strip()]


class ResourceAllocator:
    """Creates resources of one kind and moves people in and out of them."""

    def __init__(self, kind: ResourceKind) -> None:
        if kind not in RESOURCE_CLASSES:
            raise PlannerError(ErrorCode.VALIDATION_ERROR, f"Unknown resource kind: {kind}")
        self.kind = ResourceKind(kind)
        self.resource_class = RESOURCE_CLASSES[self.kind]

    def __repr__(self) -> str:
        return f"ResourceAllocator({self.kind.value})"

    def _check_kind(self, resource: Resource) -> None:
        if not isinstance(resource, self.resource_class):
            raise PlannerError(
                ErrorCode.VALIDATION_ERROR,
                f"{self!r} cannot manage {type(resource).__name__}",
            )

    def create(
        self,
        name: str,
        capacity: Any,
        type: str | None = None,
        price: Any = None,
        amenities: str | Iterable[str] | None = None,
    ) -> OperationResult[Resource]:
        """
        Create an empty resource from form input.

        Capacity and price may be given as text. Rooms need a price;
        vehicles ignore price and amenities. Invalid input returns a failed
        result naming the offending field and creates nothing.
        """
        name = (name or "").strip()
        if not name:
            return OperationResult.fail(ErrorCode.VALIDATION_ERROR, details={"field": "name"})

        parsed_capacity = _parse_int(capacity)
        if parsed_capacity is None or parsed_capacity < 1:
            return OperationResult.fail(
                ErrorCode.VALIDATION_ERROR,
                "Capacity must be a whole number of at least 1",
                details={"field": "capacity"},
            )

        fields: dict[str, Any] = {"name": name, "capacity": parsed_capacity}

        if type is not None:
            try:
                fields["type"] = RESOURCE_TYPES[self.kind](type)
            except ValueError:
                return OperationResult.fail(
                    ErrorCode.VALIDATION_ERROR,
                    f"Unknown {self.kind.value} type: {type}",
                    details={"field": "type"},
                )

        if self.kind == ResourceKind.ROOM:
            parsed_price = _parse_number(price)
            if parsed_price is None or parsed_price < 0:
                return OperationResult.fail(
                    ErrorCode.VALIDATION_ERROR,
                    "Price must be a number of at least 0",
                    details={"field": "price"},
                )
            fields["price_per_night"] = parsed_price
            fields["amenities"] = parse_amenities(amenities)

        resource = self.resource_class(**fields)
        logger.info(
            f"Created {self.kind.value} {resource.id} ({resource.name}) "
            f"with capacity {resource.capacity}"
        )
        return OperationResult.ok(resource)

    def assign(
        self,
        resource: Resource,
        person_id: str,
        expected_version: int | None = None,
    ) -> OperationResult[Resource]:
        """
        Place a person in a resource.

        Fails when the resource is already at capacity, even if the person
        is one of its occupants. Assigning someone already present changes
        nothing but still counts as a successful assignment.
        """
        self._check_kind(resource)
        if len(resource.assigned_person_ids) >= resource.capacity:
            logger.warning(f"{self.kind.label} {resource.id} is full, cannot assign {person_id}")
            return OperationResult.fail(
                ErrorCode.RESOURCE_FULL,
                f"This {self.kind.value} has reached its capacity.",
                details={"title": f"{self.kind.label} Full", "resource_id": resource.id},
            )
        if expected_version is not None and expected_version != resource.version:
            return OperationResult.fail(
                ErrorCode.VERSION_CONFLICT,
                details={"expected": expected_version, "actual": resource.version},
            )

        if not resource.holds(person_id):
            resource.assigned_person_ids.append(person_id)
        self._recompute(resource)
        logger.info(f"Assigned {person_id} to {self.kind.value} {resource.id}")
        return OperationResult.ok(resource)

    def unassign(self, resource: Resource, person_id: str) -> None:
        """Take a person out of a resource; nothing happens if absent."""
        self._check_kind(resource)
        if resource.holds(person_id):
            resource.assigned_person_ids.remove(person_id)
            logger.info(f"Unassigned {person_id} from {self.kind.value} {resource.id}")
        self._recompute(resource)

    def assign_group(
        self,
        resource: Resource,
        person_ids: Iterable[str],
        expected_version: int | None = None,
    ) -> OperationResult[Resource]:
        """
        Place a whole group in a resource, or nobody at all.

        Only people not already in the resource need a place. When there
        are fewer free places than that, the resource is left unchanged.
        """
        self._check_kind(resource)
        newcomers = [pid for pid in unique_ids(person_ids) if not resource.holds(pid)]
        if len(newcomers) > resource.available:
            logger.warning(
                f"{self.kind.label} {resource.id} has {resource.available} places, "
                f"group needs {len(newcomers)}"
            )
            return OperationResult.fail(
                ErrorCode.RESOURCE_FULL,
                f"This group needs {len(newcomers)} seats but only "
                f"{resource.available} are available.",
                details={
                    "title": "Not Enough Seats",
                    "resource_id": resource.id,
                    "needed": len(newcomers),
                    "available": resource.available,
                },
            )
        if expected_version is not None and expected_version != resource.version:
            return OperationResult.fail(
                ErrorCode.VERSION_CONFLICT,
                details={"expected": expected_version, "actual": resource.version},
            )

        resource.assigned_person_ids.extend(newcomers)
        self._recompute(resource)
        logger.info(f"Assigned {len(newcomers)} people to {self.kind.value} {resource.id}")
        return OperationResult.ok(resource)

    def unassign_group(self, resource: Resource, person_ids: Iterable[str]) -> list[str]:
        """Take several people out of a resource; returns those actually removed."""
        self._check_kind(resource)
        leaving = set(person_ids)
        removed = [pid for pid in resource.assigned_person_ids if pid in leaving]
        resource.assigned_person_ids = [
            pid for pid in resource.assigned_person_ids if pid not in leaving
        ]
        self._recompute(resource)
        if removed:
            logger.info(f"Unassigned {len(removed)} people from {self.kind.value} {resource.id}")
        return removed

    def clear(self, resource: Resource) -> list[str]:
        """Empty a resource; returns the ids that were in it."""
        return self.unassign_group(resource, list(resource.assigned_person_ids))

    @staticmethod
    def _recompute(resource: Resource) -> None:
        resource.available = resource.capacity - len(resource.assigned_person_ids)
        resource.version += 1

    @staticmethod
    def find(resources: Iterable[Resource], resource_id: str) -> Resource | None:
        return next((r for r in resources if r.id == resource_id), None)

    @staticmethod
    def is_full(resource: Resource) -> bool:
        return resource.is_full

    @staticmethod
    def assigned_ids(resources: Iterable[Resource]) -> set[str]:
        """Union of every resource's occupants."""
        return {pid for r in resources for pid in r.assigned_person_ids}

    def unassigned_persons(
        self, persons: Iterable[Person], resources: Iterable[Resource]
    ) -> list[Person]:
        """People not placed in any of ``resources``, worked out afresh each call."""
        assigned = self.assigned_ids(resources)
        return [p for p in persons if p.id not in assigned]

    def overview(self, resources: Sequence[Resource]) -> ResourceOverview:
        """Counts shown above the resource list."""
        return ResourceOverview(
            total=len(resources),
            with_space=sum(1 for r in resources if r.available > 0),
            open_places=sum(r.available for r in resources),
            assigned=sum(len(r.assigned_person_ids) for r in resources),
            open_value=sum(
                r.price_per_night * r.available
                for r in resources
                if isinstance(r, Room)
            ),
        )


def persons_from_guests(
    guests: Iterable[Guest],
    attending_only: bool = True,
    include_family: bool = True,
) -> list[Person]:
    """
    List the people that can be given a room or a seat.

    With ``attending_only`` only guests and family members marked Going
    are listed. A family member is listed under its own id.
    """
    persons = []
    for guest in guests:
        if not attending_only or guest.status == RsvpStatus.GOING:
            persons.append(Person(id=guest.id, name=guest.name, guest_id=guest.id))
        if not include_family:
            continue
        for member in guest.family_members:
            if attending_only and member.rsvp_status != RsvpStatus.GOING:
                continue
            persons.append(
                Person(
                    id=member.id,
                    name=member.name,
                    guest_id=guest.id,
                    is_family_member=True,
                )
            )
    return persons


def build_seating_groups(
    guests: Iterable[Guest], attending_only: bool = True
) -> list[SeatingGroup]:
    """
    One seating group per guest: the guest followed by their family members.

    With ``attending_only`` only people marked Going are included, and
    guests left with nobody to seat are skipped.
    """
    groups = []
    for guest in guests:
        person_ids = [p.id for p in persons_from_guests([guest], attending_only)]
        if person_ids:
            groups.append(
                SeatingGroup(id=guest.id, name=guest.relation or "Group", person_ids=person_ids)
            )
    return groups


def create_route(
    name: str,
    pickup_location: str,
    dropoff_location: str,
    departure_time: str | None = None,
    arrival_time: str | None = None,
) -> OperationResult[TransportRoute]:
    """Create a transport route from form input."""
    values = {
        "name": (name or "").strip(),
        "pickup_location": (pickup_location or "").strip(),
        "dropoff_location": (dropoff_location or "").strip(),
    }
    missing = [field for field, value in values.items() if not value]
    if missing:
        return OperationResult.fail(
            ErrorCode.VALIDATION_ERROR, details={"fields": missing}
        )
    route = TransportRoute(
        **values,
        departure_time=departure_time or None,
        arrival_time=arrival_time or None,
    )
    logger.info(f"Created route {route.id} ({route.name})")
    return OperationResult.ok(route)
