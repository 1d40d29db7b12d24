"""Tests for the planner models."""

import pytest
from pydantic import ValidationError

from app.models import (
    BudgetItem,
    FamilyMember,
    Guest,
    GuestSource,
    Room,
    RsvpStatus,
    Vehicle,
    VehicleType,
)


class TestGuestModel:
    """Tests for the Guest model."""

    def test_defaults(self):
        """A new guest starts uninvited with a party of one."""
        guest = Guest(name="Test Guest")
        assert guest.status == RsvpStatus.NOT_INVITED
        assert guest.total_guests == 1
        assert guest.has_plus_one is False
        assert guest.source == GuestSource.MANUAL
        assert guest.family_members == []
        assert guest.invited_at is None
        assert isinstance(guest.id, str) and guest.id

    def test_ids_are_unique(self):
        assert Guest(name="A").id != Guest(name="B").id

    def test_initials(self):
        assert Guest(name="priya sharma").initials == "PS"
        assert Guest(name="Cher").initials == "C"
        assert Guest(name="Mary Ann Evans").initials == "MA"

    def test_total_guests_must_be_positive(self):
        with pytest.raises(ValidationError):
            Guest(name="Nobody", total_guests=0)

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Guest(name="")

    def test_invited_ids_deduplicated(self):
        guest = Guest(name="Dup", invited_family_member_ids=["f1", "f2", "f1"])
        assert guest.invited_family_member_ids == ["f1", "f2"]

    def test_find_family_member(self):
        member = FamilyMember(id="f1", name="Kid")
        guest = Guest(name="Parent", family_members=[member])
        assert guest.find_family_member("f1") is member
        assert guest.find_family_member("missing") is None

    def test_status_labels(self):
        assert RsvpStatus.NOT_GOING.value == "Not Going"
        assert RsvpStatus("Not Invited") == RsvpStatus.NOT_INVITED


class TestFamilyMemberModel:
    """Tests for the FamilyMember model."""

    def test_rsvp_status_starts_unset(self):
        member = FamilyMember(name="Meera")
        assert member.rsvp_status is None
        assert member.dietary_restrictions == []

    def test_negative_age_rejected(self):
        with pytest.raises(ValidationError):
            FamilyMember(name="Meera", age=-1)


class TestResourceModel:
    """Tests for Room and Vehicle."""

    def test_available_starts_at_capacity(self):
        room = Room(name="Suite", capacity=3, price_per_night=200)
        assert room.available == 3
        assert room.assigned_person_ids == []
        assert room.version == 0

    def test_available_derived_from_assignments(self):
        room = Room(name="Suite", capacity=3, assigned_person_ids=["a", "b"], available=3)
        assert room.available == 1

    def test_over_capacity_rejected(self):
        with pytest.raises(ValidationError):
            Vehicle(name="Car", capacity=1, assigned_person_ids=["a", "b"])

    def test_zero_capacity_rejected(self):
        with pytest.raises(ValidationError):
            Vehicle(name="Car", capacity=0)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Room(name="Cheap", capacity=1, price_per_night=-5)

    def test_vehicle_default_type(self):
        assert Vehicle(name="Car", capacity=4).type == VehicleType.CAR

    def test_is_full(self):
        room = Room(name="Single", capacity=1, assigned_person_ids=["a"])
        assert room.is_full is True


class TestBudgetItemModel:
    """Tests for the BudgetItem derived fields."""

    def test_remaining_and_over_budget(self):
        item = BudgetItem(category="Venue", estimated=5000, actual=5200)
        assert item.remaining == -200
        assert item.is_over_budget is True

    def test_under_budget(self):
        item = BudgetItem(category="Attire", estimated=800, actual=750)
        assert item.remaining == 50
        assert item.is_over_budget is False

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            BudgetItem(category="Venue", estimated=-1)
