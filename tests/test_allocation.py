"""Tests for room, vehicle and table assignment."""

import random
from datetime import date, datetime

import pytest

from app.allocation.engine import (
    ResourceAllocator,
    build_seating_groups,
    create_route,
    parse_amenities,
    persons_from_guests,
)
from app.allocation.stay import calculate_nights, calculate_total_price
from app.core.errors import ErrorCode, PlannerError
from app.models import (
    FamilyMember,
    Guest,
    Person,
    ResourceKind,
    Room,
    RoomType,
    RsvpStatus,
    TABLE_TEMPLATES,
    Table,
    TableShape,
    Vehicle,
    VehicleType,
)


@pytest.fixture(name="rooms")
def rooms_fixture() -> ResourceAllocator:
    return ResourceAllocator(ResourceKind.ROOM)


@pytest.fixture(name="vehicles")
def vehicles_fixture() -> ResourceAllocator:
    return ResourceAllocator(ResourceKind.VEHICLE)


@pytest.fixture(name="tables")
def tables_fixture() -> ResourceAllocator:
    return ResourceAllocator(ResourceKind.TABLE)


def assert_capacity_invariant(resource):
    assigned = resource.assigned_person_ids
    assert len(assigned) == len(set(assigned))
    assert 0 <= resource.available <= resource.capacity
    assert resource.available == resource.capacity - len(assigned)
    assert len(assigned) <= resource.capacity


class TestCreate:
    def test_create_room_from_form_values(self, rooms: ResourceAllocator):
        result = rooms.create(" Deluxe ", "2", type="double", price="150", amenities="WiFi, TV, ,AC")
        assert result.success
        room = result.value
        assert isinstance(room, Room)
        assert room.name == "Deluxe"
        assert room.capacity == 2
        assert room.available == 2
        assert room.type == RoomType.DOUBLE
        assert room.price_per_night == 150
        assert room.amenities == ["WiFi", "TV", "AC"]
        assert room.assigned_person_ids == []

    def test_create_vehicle_without_price(self, vehicles: ResourceAllocator):
        result = vehicles.create("Bus 1", 30, type="bus")
        assert result.success
        assert isinstance(result.value, Vehicle)
        assert result.value.type == VehicleType.BUS
        assert result.value.available == 30

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, rooms: ResourceAllocator, name):
        result = rooms.create(name, 2, price=100)
        assert not result.success
        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert result.details == {"field": "name"}

    @pytest.mark.parametrize("capacity", ["", "two", "2.5", None, 0, -1, "0", True])
    def test_bad_capacity_rejected(self, vehicles: ResourceAllocator, capacity):
        result = vehicles.create("Car", capacity)
        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert result.details == {"field": "capacity"}

    @pytest.mark.parametrize("price", ["", "cheap", None, -10, "nan"])
    def test_bad_room_price_rejected(self, rooms: ResourceAllocator, price):
        result = rooms.create("Room", 2, price=price)
        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert result.details == {"field": "price"}

    def test_unknown_type_rejected(self, vehicles: ResourceAllocator):
        result = vehicles.create("Boat", 4, type="boat")
        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert result.details == {"field": "type"}

    def test_failed_result_is_falsy(self, rooms: ResourceAllocator):
        assert not rooms.create("", 1, price=1)
        assert rooms.create("Ok", 1, price=1)


class TestAssign:
    def test_fill_then_reject(self, vehicles: ResourceAllocator):
        vehicle = Vehicle(name="Car", capacity=2)

        assert vehicles.assign(vehicle, "p1").success
        assert vehicle.available == 1
        assert vehicles.assign(vehicle, "p2").success
        assert vehicle.available == 0

        result = vehicles.assign(vehicle, "p3")
        assert not result.success
        assert result.error_code == ErrorCode.RESOURCE_FULL
        assert result.details["title"] == "Vehicle Full"
        assert vehicle.assigned_person_ids == ["p1", "p2"]
        assert vehicle.available == 0

    def test_room_full_title(self, rooms: ResourceAllocator):
        room = Room(name="Single", capacity=1, assigned_person_ids=["p1"])
        result = rooms.assign(room, "p2")
        assert result.details["title"] == "Room Full"
        assert result.message == "This room has reached its capacity."

    def test_reassign_is_idempotent(self, rooms: ResourceAllocator):
        room = Room(name="Double", capacity=2)
        rooms.assign(room, "p1")
        result = rooms.assign(room, "p1")
        assert result.success
        assert room.assigned_person_ids == ["p1"]
        assert room.available == 1

    def test_reassign_into_full_resource_fails(self, rooms: ResourceAllocator):
        room = Room(name="Single", capacity=1)
        rooms.assign(room, "p1")
        assert rooms.assign(room, "p1").error_code == ErrorCode.RESOURCE_FULL
        assert room.assigned_person_ids == ["p1"]

    def test_version_increments(self, rooms: ResourceAllocator):
        room = Room(name="Double", capacity=2)
        rooms.assign(room, "p1")
        rooms.unassign(room, "p1")
        assert room.version == 2

    def test_version_conflict(self, rooms: ResourceAllocator):
        room = Room(name="Double", capacity=2)
        rooms.assign(room, "p1")
        result = rooms.assign(room, "p2", expected_version=0)
        assert result.error_code == ErrorCode.VERSION_CONFLICT
        assert room.assigned_person_ids == ["p1"]
        assert rooms.assign(room, "p2", expected_version=1).success

    def test_wrong_kind_raises(self, rooms: ResourceAllocator):
        with pytest.raises(PlannerError):
            rooms.assign(Vehicle(name="Car", capacity=4), "p1")


class TestUnassign:
    def test_frees_place(self, vehicles: ResourceAllocator):
        vehicle = Vehicle(name="Car", capacity=2, assigned_person_ids=["p1", "p2"])
        vehicles.unassign(vehicle, "p1")
        assert vehicle.assigned_person_ids == ["p2"]
        assert vehicle.available == 1

    def test_absent_person_is_noop(self, vehicles: ResourceAllocator):
        vehicle = Vehicle(name="Car", capacity=2, assigned_person_ids=["p1"])
        vehicles.unassign(vehicle, "ghost")
        assert vehicle.assigned_person_ids == ["p1"]
        assert vehicle.available == 1


class TestCapacityInvariant:
    @pytest.mark.parametrize("seed", range(20))
    def test_random_sequences(self, rooms: ResourceAllocator, seed):
        rng = random.Random(seed)
        room = Room(name="Room", capacity=rng.randint(1, 5), price_per_night=100)
        people = [f"p{i}" for i in range(8)]
        for _ in range(60):
            person = rng.choice(people)
            if rng.random() < 0.6:
                was_full = room.is_full
                result = rooms.assign(room, person)
                assert result.success != was_full
            else:
                rooms.unassign(room, person)
            assert_capacity_invariant(room)


    @pytest.mark.parametrize("seed", range(10))
    def test_random_group_sequences(self, tables: ResourceAllocator, seed):
        rng = random.Random(seed)
        table = Table(name="Table", capacity=rng.randint(2, 8))
        people = [f"p{i}" for i in range(12)]
        for _ in range(40):
            group = rng.sample(people, rng.randint(1, 4))
            if rng.random() < 0.6:
                before = list(table.assigned_person_ids)
                result = tables.assign_group(table, group)
                if not result.success:
                    assert table.assigned_person_ids == before
            else:
                tables.unassign_group(table, group)
            assert_capacity_invariant(table)


class TestTableSeating:
    """Tests for seating groups at reception tables."""

    def test_create_table(self, tables: ResourceAllocator):
        result = tables.create("Head Table", "12", type="rectangle")
        assert isinstance(result.value, Table)
        assert result.value.type == TableShape.RECTANGLE
        assert result.value.available == 12

    def test_templates(self):
        assert [(t.name, t.capacity) for t in TABLE_TEMPLATES] == [
            ("Head Table", 12),
            ("Round Table", 8),
            ("Round Table", 10),
        ]

    def test_group_fits(self, tables: ResourceAllocator):
        table = Table(name="T1", capacity=4, assigned_person_ids=["x"])
        result = tables.assign_group(table, ["a", "b", "c"])
        assert result.success
        assert table.assigned_person_ids == ["x", "a", "b", "c"]
        assert table.available == 0
        assert table.seated_count == 4

    def test_group_too_large_seats_nobody(self, tables: ResourceAllocator):
        table = Table(name="T1", capacity=4, assigned_person_ids=["x", "y"])
        result = tables.assign_group(table, ["a", "b", "c"])
        assert result.error_code == ErrorCode.RESOURCE_FULL
        assert result.details["title"] == "Not Enough Seats"
        assert result.message == "This group needs 3 seats but only 2 are available."
        assert table.assigned_person_ids == ["x", "y"]
        assert table.version == 0

    def test_members_already_seated_need_no_seat(self, tables: ResourceAllocator):
        table = Table(name="T1", capacity=3, assigned_person_ids=["a", "b"])
        assert tables.assign_group(table, ["a", "b", "c"]).success
        assert table.assigned_person_ids == ["a", "b", "c"]

    def test_group_version_conflict(self, tables: ResourceAllocator):
        table = Table(name="T1", capacity=4)
        result = tables.assign_group(table, ["a"], expected_version=3)
        assert result.error_code == ErrorCode.VERSION_CONFLICT
        assert table.assigned_person_ids == []

    def test_unassign_group(self, tables: ResourceAllocator):
        table = Table(name="T1", capacity=4, assigned_person_ids=["a", "b", "c"])
        assert tables.unassign_group(table, ["c", "a", "ghost"]) == ["a", "c"]
        assert table.assigned_person_ids == ["b"]
        assert table.available == 3

    def test_clear(self, tables: ResourceAllocator):
        table = Table(name="T1", capacity=4, assigned_person_ids=["a", "b"])
        assert tables.clear(table) == ["a", "b"]
        assert table.available == 4

    def test_rejects_other_kinds(self, tables: ResourceAllocator):
        with pytest.raises(PlannerError):
            tables.assign_group(Room(name="R", capacity=2), ["a"])

    def test_build_seating_groups(self):
        guests = [
            Guest(
                id="g1",
                name="Jane",
                relation="Family",
                status=RsvpStatus.GOING,
                family_members=[
                    FamilyMember(id="m1", name="Jim", rsvp_status=RsvpStatus.GOING),
                    FamilyMember(id="m2", name="Jill", rsvp_status=RsvpStatus.PENDING),
                ],
            ),
            Guest(id="g2", name="Ann", status=RsvpStatus.GOING),
            Guest(id="g3", name="Bob", status=RsvpStatus.PENDING),
        ]
        groups = build_seating_groups(guests)
        assert [(g.id, g.name, g.person_ids) for g in groups] == [
            ("g1", "Family", ["g1", "m1"]),
            ("g2", "Group", ["g2"]),
        ]
        assert groups[0].size == 2


class TestUnassignedPersons:
    def test_union_across_resources(self, rooms: ResourceAllocator):
        persons = [Person(id=i, name=i.upper(), guest_id=i) for i in ["a", "b", "c", "d"]]
        resources = [
            Room(name="R1", capacity=2, assigned_person_ids=["a"]),
            Room(name="R2", capacity=2, assigned_person_ids=["c", "zzz"]),
        ]
        assert [p.id for p in rooms.unassigned_persons(persons, resources)] == ["b", "d"]

    def test_recomputed_after_unassign(self, rooms: ResourceAllocator):
        persons = [Person(id="a", name="A", guest_id="a")]
        room = Room(name="R1", capacity=1, assigned_person_ids=["a"])
        assert rooms.unassigned_persons(persons, [room]) == []
        rooms.unassign(room, "a")
        assert [p.id for p in rooms.unassigned_persons(persons, [room])] == ["a"]


class TestPersonsFromGuests:
    def test_attending_only(self):
        guests = [
            Guest(
                id="g1",
                name="Going Guest",
                status=RsvpStatus.GOING,
                family_members=[
                    FamilyMember(id="m1", name="Going Kid", rsvp_status=RsvpStatus.GOING),
                    FamilyMember(id="m2", name="Pending Kid", rsvp_status=RsvpStatus.PENDING),
                ],
            ),
            Guest(
                id="g2",
                name="Pending Guest",
                status=RsvpStatus.PENDING,
                family_members=[
                    FamilyMember(id="m3", name="Going Spouse", rsvp_status=RsvpStatus.GOING)
                ],
            ),
        ]
        persons = persons_from_guests(guests)
        assert [(p.id, p.guest_id, p.is_family_member) for p in persons] == [
            ("g1", "g1", False),
            ("m1", "g1", True),
            ("m3", "g2", True),
        ]

    def test_everyone_without_family(self):
        guests = [
            Guest(id="g1", name="A", family_members=[FamilyMember(id="m1", name="B")]),
        ]
        persons = persons_from_guests(guests, attending_only=False, include_family=False)
        assert [p.id for p in persons] == ["g1"]


class TestOverview:
    def test_room_overview(self, rooms: ResourceAllocator):
        resources = [
            Room(name="A", capacity=2, price_per_night=100, assigned_person_ids=["p1"]),
            Room(name="B", capacity=1, price_per_night=50, assigned_person_ids=["p2"]),
            Room(name="C", capacity=3, price_per_night=200),
        ]
        overview = rooms.overview(resources)
        assert overview.total == 3
        assert overview.with_space == 2
        assert overview.open_places == 4
        assert overview.assigned == 2
        assert overview.open_value == 100 + 600

    def test_vehicle_overview_has_no_value(self, vehicles: ResourceAllocator):
        overview = vehicles.overview([Vehicle(name="Van", capacity=7)])
        assert overview.open_places == 7
        assert overview.open_value == 0


class TestRoutes:
    def test_create_route(self):
        result = create_route("Airport run", " Airport ", "Hotel", departure_time="09:00")
        assert result.success
        assert result.value.pickup_location == "Airport"
        assert result.value.arrival_time is None

    def test_missing_fields(self):
        result = create_route("Loop", "", "  ")
        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert result.details == {"fields": ["pickup_location", "dropoff_location"]}


class TestHelpers:
    def test_parse_amenities(self):
        assert parse_amenities(None) == []
        assert parse_amenities(["Pool ", "", "Gym"]) == ["Pool", "Gym"]

    def test_calculate_nights(self):
        assert calculate_nights(date(2026, 6, 1), date(2026, 6, 4)) == 3
        assert calculate_nights(date(2026, 6, 4), date(2026, 6, 1)) == 3
        assert calculate_nights(date(2026, 6, 1), date(2026, 6, 1)) == 1
        assert calculate_nights(datetime(2026, 6, 1, 14), datetime(2026, 6, 2, 18)) == 2

    def test_calculate_total_price(self):
        assert calculate_total_price(120, 3) == 360

    def test_unknown_kind_raises(self):
        with pytest.raises(PlannerError):
            ResourceAllocator("boat")
