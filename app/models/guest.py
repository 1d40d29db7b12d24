"""Guest models for invitation and RSVP tracking.

This module defines the Guest model, the top-level invitee record of the
guest list, along with the payloads used to create and edit guests and the
aggregate statistics derived from a guest collection.
"""

from datetime import datetime

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from app.models.common import new_id, unique_ids
from app.models.enums import GuestSource, RsvpStatus
from app.models.family import FamilyMember


class GuestBase(SQLModel):
    """Fields shared by stored guests and create payloads."""

    name: str = Field(min_length=1)
    avatar: str | None = None
    relation: str | None = None
    category: str | None = None
    phone: str | None = None
    email: str | None = None
    dietary_restrictions: list[str] = Field(default_factory=list)
    meal_preference: str | None = None
    status: RsvpStatus = Field(default=RsvpStatus.NOT_INVITED)
    has_plus_one: bool = Field(default=False)
    plus_one_name: str | None = None
    total_guests: int = Field(default=1, ge=1)
    family_members: list[FamilyMember] = Field(default_factory=list)
    invited_family_member_ids: list[str] = Field(default_factory=list)
    source: GuestSource = Field(default=GuestSource.MANUAL)
    created_at: datetime | None = None
    invited_at: datetime | None = None

    @field_validator("invited_family_member_ids")
    @classmethod
    def dedupe_invited_ids(cls, value: list[str]) -> list[str]:
        return unique_ids(value)


class Guest(GuestBase):
    """An invitee on the guest list.

    Guests start at ``Not Invited`` and move through the RSVP states via
    the operations in ``app.guests.rsvp``. A guest may bring a plus-one and
    any number of family members, each with their own RSVP status.

    Attributes:
        id: Opaque unique identifier.
        name: Display name.
        avatar: Image URI, if any.
        relation: Relation to the hosts; matched by the category filter.
        category: Free-form grouping label.
        phone: Phone number as entered (not normalised).
        email: Email address.
        status: Current RSVP status of the guest themself.
        has_plus_one: Whether the guest brings an unnamed or named companion.
        plus_one_name: Name of the companion, if known.
        total_guests: Party size declared by the guest (at least 1).
        family_members: Ordered list of family members.
        invited_family_member_ids: Ids of family members that have been
            sent an invitation. Expected to reference ``family_members``
            but not enforced; see ``EventPlanner.audit``.
        source: Where the record came from (manual entry, import, RSVP).
        created_at: When the record was added.
        invited_at: When the first invitation was sent.
    """

    id: str = Field(default_factory=new_id)

    @property
    def initials(self) -> str:
        """Up to two uppercase initials taken from the name."""
        parts = self.name.split()
        return "".join(part[0] for part in parts[:2]).upper()

    def find_family_member(self, member_id: str) -> FamilyMember | None:
        """Return the family member with ``member_id``, if present."""
        return next((m for m in self.family_members if m.id == member_id), None)


class GuestCreate(GuestBase):
    """Data required to add a guest; the id is assigned by the store."""


class GuestUpdate(SQLModel):
    """Fields that can be edited on an existing guest.

    Only fields explicitly set on the payload are merged into the guest.
    """

    name: str | None = Field(default=None, min_length=1)
    avatar: str | None = None
    relation: str | None = None
    category: str | None = None
    phone: str | None = None
    email: str | None = None
    dietary_restrictions: list[str] | None = None
    meal_preference: str | None = None
    status: RsvpStatus | None = None
    has_plus_one: bool | None = None
    plus_one_name: str | None = None
    total_guests: int | None = Field(default=None, ge=1)
    family_members: list[FamilyMember] | None = None
    invited_family_member_ids: list[str] | None = None
    source: GuestSource | None = None
    invited_at: datetime | None = None

    @field_validator("invited_family_member_ids")
    @classmethod
    def dedupe_invited_ids(cls, value: list[str] | None) -> list[str] | None:
        return unique_ids(value) if value is not None else None


class GuestStats(SQLModel):
    """Aggregate counts over a guest collection.

    ``total_guests`` counts every guest once plus one more for each guest
    bringing a plus-one; the four status counts always add up to the
    number of guests.
    """

    going: int = 0
    pending: int = 0
    not_going: int = 0
    not_invited: int = 0
    total_guests: int = 0
    invited_guests: int = 0
