"""Event planner: guests, rooms, vehicles, tables and budget for one event.

``EventPlanner`` wires the guest store, the resource allocators and
the budget ledger together and handles the operations that touch more
than one of them, such as removing a guest who holds a room.
"""
import logging
from collections.abc import Iterable
from typing import Any

from sqlmodel import Field, SQLModel

from app.allocation.engine import (
    ResourceAllocator,
    build_seating_groups,
    create_route,
    persons_from_guests,
)
from app.budget.ledger import BudgetLedger
from app.core.config import Settings, settings as default_settings
from app.core.errors import ErrorCode, OperationResult
from app.guests.store import GuestStore
from app.models import (
    Guest,
    GuestCreate,
    GuestSource,
    Person,
    PlannerSnapshot,
    Resource,
    ResourceKind,
    Room,
    SeatingGroup,
    Table,
    TableTemplate,
    TransportRoute,
    Vehicle,
)

logger = logging.getLogger(__name__)


class ConsistencyIssue(SQLModel):
    """A reference to a guest, family member or person that no longer exists."""

    code: ErrorCode = Field(default=ErrorCode.CONSISTENCY_VIOLATION)
    owner_id: str
    missing_id: str
    description: str


class EventPlanner:
    """All planning data for one event."""

    def __init__(
        self,
        settings: Settings | None = None,
        snapshot: PlannerSnapshot | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.room_allocator = ResourceAllocator(ResourceKind.ROOM)
        self.vehicle_allocator = ResourceAllocator(ResourceKind.VEHICLE)
        self.table_allocator = ResourceAllocator(ResourceKind.TABLE)
        self.restore(snapshot or PlannerSnapshot())

    # Snapshots

    def snapshot(self) -> PlannerSnapshot:
        """A deep copy of the current state, safe to serialise or keep."""
        return PlannerSnapshot(
            guests=[g.model_copy(deep=True) for g in self.guests],
            rooms=[r.model_copy(deep=True) for r in self.rooms],
            vehicles=[v.model_copy(deep=True) for v in self.vehicles],
            tables=[t.model_copy(deep=True) for t in self.tables],
            routes=[r.model_copy(deep=True) for r in self.routes],
            budget_items=[i.model_copy(deep=True) for i in self.budget.all()],
        )

    def restore(self, snapshot: PlannerSnapshot) -> None:
        """Replace the current state with a copy of ``snapshot``."""
        snapshot = snapshot.model_copy(deep=True)
        self.guests = GuestStore(snapshot.guests)
        self.rooms: list[Room] = snapshot.rooms
        self.vehicles: list[Vehicle] = snapshot.vehicles
        self.tables: list[Table] = snapshot.tables
        self.routes: list[TransportRoute] = snapshot.routes
        self.budget = BudgetLedger(snapshot.budget_items)

    # Resources

    def _resources(self, kind: ResourceKind) -> list[Resource]:
        return {
            ResourceKind.ROOM: self.rooms,
            ResourceKind.VEHICLE: self.vehicles,
            ResourceKind.TABLE: self.tables,
        }[kind]

    def _allocator(self, kind: ResourceKind) -> ResourceAllocator:
        return {
            ResourceKind.ROOM: self.room_allocator,
            ResourceKind.VEHICLE: self.vehicle_allocator,
            ResourceKind.TABLE: self.table_allocator,
        }[kind]

    def add_room(
        self,
        name: str,
        capacity: Any,
        price_per_night: Any,
        type: str | None = None,
        amenities: Any = None,
    ) -> OperationResult[Room]:
        result = self.room_allocator.create(
            name, capacity, type=type, price=price_per_night, amenities=amenities
        )
        if result.success:
            self.rooms.append(result.value)
        return result

    def add_vehicle(
        self, name: str, capacity: Any, type: str | None = None
    ) -> OperationResult[Vehicle]:
        result = self.vehicle_allocator.create(name, capacity, type=type)
        if result.success:
            self.vehicles.append(result.value)
        return result

    def add_route(self, **fields: Any) -> OperationResult[TransportRoute]:
        result = create_route(**fields)
        if result.success:
            self.routes.append(result.value)
        return result

    def assign(
        self,
        kind: ResourceKind,
        resource_id: str,
        person_id: str,
        expected_version: int | None = None,
    ) -> OperationResult[Resource]:
        resource = ResourceAllocator.find(self._resources(kind), resource_id)
        if resource is None:
            return OperationResult.fail(
                ErrorCode.NOT_FOUND, details={"resource_id": resource_id}
            )
        return self._allocator(kind).assign(resource, person_id, expected_version)

    def unassign(self, kind: ResourceKind, resource_id: str, person_id: str) -> None:
        resource = ResourceAllocator.find(self._resources(kind), resource_id)
        if resource is not None:
            self._allocator(kind).unassign(resource, person_id)

    def assign_room(self, room_id: str, person_id: str) -> OperationResult[Resource]:
        return self.assign(ResourceKind.ROOM, room_id, person_id)

    def unassign_room(self, room_id: str, person_id: str) -> None:
        self.unassign(ResourceKind.ROOM, room_id, person_id)

    def assign_vehicle(self, vehicle_id: str, person_id: str) -> OperationResult[Resource]:
        return self.assign(ResourceKind.VEHICLE, vehicle_id, person_id)

    def unassign_vehicle(self, vehicle_id: str, person_id: str) -> None:
        self.unassign(ResourceKind.VEHICLE, vehicle_id, person_id)

    # Seating

    def add_table(
        self, name: str, capacity: Any, type: str | None = None
    ) -> OperationResult[Table]:
        result = self.table_allocator.create(name, capacity, type=type)
        if result.success:
            self.tables.append(result.value)
        return result

    def add_table_from_template(self, template: TableTemplate) -> OperationResult[Table]:
        return self.add_table(template.name, template.capacity, type=template.type)

    def remove_table(self, table_id: str) -> list[str]:
        """Delete a table; returns the ids of the people who were seated at it."""
        table = ResourceAllocator.find(self.tables, table_id)
        if table is None:
            return []
        seated = self.table_allocator.clear(table)
        self.tables.remove(table)
        logger.info(f"Removed table {table_id}, unseating {len(seated)}")
        return seated

    def seating_groups(self) -> list[SeatingGroup]:
        """Attending guests grouped with their attending family members."""
        return build_seating_groups(self.guests)

    def unseated_groups(self) -> list[SeatingGroup]:
        """Groups with at least one member not yet at any table."""
        seated = ResourceAllocator.assigned_ids(self.tables)
        return [
            g for g in self.seating_groups() if any(pid not in seated for pid in g.person_ids)
        ]

    def _group(self, guest_id: str) -> SeatingGroup | None:
        return next((g for g in self.seating_groups() if g.id == guest_id), None)

    def assign_group_to_table(
        self, table_id: str, guest_id: str, expected_version: int | None = None
    ) -> OperationResult[Resource]:
        """
        Seat a guest's whole group at one table.

        Members already seated at another table stay where they are; the
        rest are seated together or, when the table lacks room, not at all.
        """
        table = ResourceAllocator.find(self.tables, table_id)
        group = self._group(guest_id)
        if table is None or group is None:
            return OperationResult.fail(
                ErrorCode.NOT_FOUND,
                details={"resource_id": table_id, "guest_id": guest_id},
            )
        elsewhere = ResourceAllocator.assigned_ids(t for t in self.tables if t is not table)
        person_ids = [pid for pid in group.person_ids if pid not in elsewhere]
        return self.table_allocator.assign_group(table, person_ids, expected_version)

    def remove_group_from_table(self, table_id: str, guest_id: str) -> list[str]:
        table = ResourceAllocator.find(self.tables, table_id)
        group = self._group(guest_id)
        if table is None or group is None:
            return []
        return self.table_allocator.unassign_group(table, group.person_ids)

    def unassign_from_table(self, table_id: str, person_id: str) -> None:
        self.unassign(ResourceKind.TABLE, table_id, person_id)

    def clear_table(self, table_id: str) -> list[str]:
        table = ResourceAllocator.find(self.tables, table_id)
        return self.table_allocator.clear(table) if table is not None else []

    def seated_count(self) -> int:
        return len(ResourceAllocator.assigned_ids(self.tables))

    def attending_persons(self) -> list[Person]:
        """Guests and family members marked Going."""
        return persons_from_guests(self.guests)

    def unassigned_for_rooms(self) -> list[Person]:
        return self.room_allocator.unassigned_persons(self.attending_persons(), self.rooms)

    def unassigned_for_vehicles(self) -> list[Person]:
        return self.vehicle_allocator.unassigned_persons(
            self.attending_persons(), self.vehicles
        )

    # Guests

    def import_guests(
        self,
        records: Iterable[GuestCreate | dict[str, Any]],
        source: GuestSource | None = None,
    ) -> list[Guest]:
        """Import guests, tagged with ``settings.default_guest_source`` unless given."""
        return self.guests.import_guests(
            records, source or self.settings.default_guest_source
        )

    def remove_guest(self, guest_id: str) -> bool:
        """
        Remove a guest from the list.

        With ``cascade_guest_removal`` enabled the guest and their family
        members are also taken out of every room, vehicle and table. Otherwise
        their places stay taken until unassigned explicitly.
        """
        guest = self.guests.remove(guest_id)
        if guest is None:
            return False
        if self.settings.cascade_guest_removal:
            person_ids = [guest.id, *(m.id for m in guest.family_members)]
            for kind in ResourceKind:
                allocator = self._allocator(kind)
                for resource in self._resources(kind):
                    for person_id in person_ids:
                        if resource.holds(person_id):
                            allocator.unassign(resource, person_id)
        return True

    def audit(self) -> list[ConsistencyIssue]:
        """
        Report references that point at missing records.

        Checks invited family member ids against each guest's family and
        resource occupants against the current guests and family
        members. Nothing is changed.
        """
        issues = []
        known_ids = set()
        for guest in self.guests:
            known_ids.add(guest.id)
            member_ids = {m.id for m in guest.family_members}
            known_ids |= member_ids
            for invited_id in guest.invited_family_member_ids:
                if invited_id not in member_ids:
                    issues.append(
                        ConsistencyIssue(
                            owner_id=guest.id,
                            missing_id=invited_id,
                            description=f"Guest {guest.name!r} lists an invite for unknown family member",
                        )
                    )
        for kind in ResourceKind:
            for resource in self._resources(kind):
                for person_id in resource.assigned_person_ids:
                    if person_id not in known_ids:
                        issues.append(
                            ConsistencyIssue(
                                owner_id=resource.id,
                                missing_id=person_id,
                                description=f"{kind.label} {resource.name!r} holds a place for an unknown person",
                            )
                        )
        if issues:
            logger.warning(f"Audit found {len(issues)} dangling references")
        return issues
