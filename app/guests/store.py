"""In-memory guest list.

``GuestStore`` owns the ordered list of guests for one event. Lookups by an
unknown id return ``None`` and leave the list untouched, so the caller can
retry or ignore a stale id without handling errors.
"""
import logging
from collections.abc import Iterable, Iterator
from datetime import UTC, datetime
from typing import Any

from app.guests import rsvp
from app.guests.filters import compute_stats, filter_and_sort
from app.models.common import new_id
from app.models import (
    FamilyMember,
    FamilyMemberCreate,
    FamilyMemberUpdate,
    Guest,
    GuestCategory,
    GuestCreate,
    GuestSource,
    GuestStats,
    GuestUpdate,
    InvitationFilter,
    RsvpStatus,
    RsvpTab,
    SortOption,
)

logger = logging.getLogger(__name__)


def _set_fields(payload: Any) -> dict[str, Any]:
    """Fields explicitly given on an update payload, as live objects."""
    return {name: getattr(payload, name) for name in payload.model_fields_set}


class GuestStore:
    """The guest list of one event."""

    def __init__(self, guests: Iterable[Guest] | None = None) -> None:
        self._guests: list[Guest] = list(guests or [])

    def __len__(self) -> int:
        return len(self._guests)

    def __iter__(self) -> Iterator[Guest]:
        return iter(self._guests)

    def all(self) -> list[Guest]:
        """A copy of the list; the guests themselves are shared."""
        return list(self._guests)

    def get(self, guest_id: str) -> Guest | None:
        return next((g for g in self._guests if g.id == guest_id), None)

    def _renumber_family(self, guest: Guest, skip: Guest | None = None) -> None:
        """Give a new id to family members whose id another guest already uses."""
        taken = {m.id for g in self._guests if g is not skip for m in g.family_members}
        seen = set()
        renamed = {}
        for member in guest.family_members:
            if member.id in taken:
                old_id = member.id
                member.id = new_id()
                renamed[old_id] = member.id
            elif member.id in seen:
                member.id = new_id()
            seen.add(member.id)
        if renamed:
            guest.invited_family_member_ids = [
                renamed.get(i, i) for i in guest.invited_family_member_ids
            ]
            logger.info(f"Renumbered {len(renamed)} family members of guest {guest.id}")

    def add(self, guest: GuestCreate | dict[str, Any]) -> Guest:
        """
        Add a guest under a newly assigned id.

        The payload is copied, so the stored guest and its family members
        never share objects with the caller. Invalid data (an empty name,
        say) raises pydantic's ``ValidationError`` and adds nothing; failure
        results are kept for form input, as in ``ResourceAllocator.create``.
        """
        if isinstance(guest, dict):
            guest = GuestCreate.model_validate(guest)
        guest = guest.model_copy(deep=True)
        update = {}
        if guest.created_at is None:
            update["created_at"] = datetime.now(UTC)
        new_guest = Guest.model_validate(guest, update=update)
        self._renumber_family(new_guest)
        self._guests.append(new_guest)
        logger.info(f"Added guest {new_guest.id} ({new_guest.source.value})")
        return new_guest

    def import_guests(
        self,
        records: Iterable[GuestCreate | dict[str, Any]],
        source: GuestSource,
    ) -> list[Guest]:
        """
        Add guests read from a spreadsheet or the address book.

        Imported guests always start uninvited and are tagged with ``source``.
        Every record is validated before any guest is added.
        """
        payloads = [
            GuestCreate.model_validate(
                record if isinstance(record, dict) else dict(record)
            )
            for record in records
        ]
        added = []
        for payload in payloads:
            payload.source = source
            payload.status = RsvpStatus.NOT_INVITED
            added.append(self.add(payload))
        logger.info(f"Imported {len(added)} guests from {source.value}")
        return added

    def update(
        self, guest_id: str, updates: GuestUpdate | dict[str, Any]
    ) -> Guest | None:
        """
        Merge the given fields into a guest.

        The merged guest is validated before anything is written, so an
        invalid update raises without changing the stored guest.
        """
        guest = self.get(guest_id)
        if guest is None:
            return None
        if isinstance(updates, dict):
            updates = GuestUpdate.model_validate(updates)
        changes = _set_fields(updates.model_copy(deep=True))
        merged = Guest.model_validate(guest, update=changes)
        if "family_members" in changes:
            self._renumber_family(merged, skip=guest)
        for name in changes:
            setattr(guest, name, getattr(merged, name))
        if "family_members" in changes:
            guest.invited_family_member_ids = merged.invited_family_member_ids
        logger.info(f"Updated guest {guest_id}: {sorted(changes)}")
        return guest

    def remove(self, guest_id: str) -> Guest | None:
        """
        Delete a guest.

        Room and vehicle assignments holding the guest are left alone;
        ``EventPlanner.remove_guest`` decides whether to clear them.
        """
        guest = self.get(guest_id)
        if guest is None:
            return None
        self._guests.remove(guest)
        logger.info(f"Removed guest {guest_id}")
        return guest

    # RSVP actions by id

    def send_invite(self, guest_id: str) -> Guest | None:
        guest = self.get(guest_id)
        return rsvp.send_invite(guest) if guest else None

    def send_family_invite(
        self, guest_id: str, member_ids: Iterable[str]
    ) -> list[str] | None:
        guest = self.get(guest_id)
        return rsvp.send_family_invite(guest, member_ids) if guest else None

    def update_guest_status(
        self, guest_id: str, status: RsvpStatus
    ) -> Guest | None:
        guest = self.get(guest_id)
        return rsvp.update_guest_status(guest, status) if guest else None

    def update_family_member_rsvp(
        self, guest_id: str, member_id: str, status: RsvpStatus
    ) -> bool:
        guest = self.get(guest_id)
        if guest is None:
            return False
        return rsvp.update_family_member_rsvp(guest, member_id, status)

    # Family members

    def add_family_member(
        self, guest_id: str, member: FamilyMemberCreate | dict[str, Any]
    ) -> FamilyMember | None:
        guest = self.get(guest_id)
        if guest is None:
            return None
        if isinstance(member, dict):
            member = FamilyMemberCreate.model_validate(member)
        new_member = FamilyMember.model_validate(member)
        guest.family_members.append(new_member)
        logger.info(f"Added family member {new_member.id} to guest {guest_id}")
        return new_member

    def update_family_member(
        self,
        guest_id: str,
        member_id: str,
        updates: FamilyMemberUpdate | dict[str, Any],
    ) -> FamilyMember | None:
        guest = self.get(guest_id)
        member = guest.find_family_member(member_id) if guest else None
        if member is None:
            return None
        if isinstance(updates, dict):
            updates = FamilyMemberUpdate.model_validate(updates)
        changes = _set_fields(updates)
        merged = FamilyMember.model_validate(member, update=changes)
        for name in changes:
            setattr(member, name, getattr(merged, name))
        return member

    def remove_family_member(
        self, guest_id: str, member_id: str
    ) -> FamilyMember | None:
        """Remove a family member and forget that they were invited."""
        guest = self.get(guest_id)
        member = guest.find_family_member(member_id) if guest else None
        if member is None:
            return None
        guest.family_members.remove(member)
        guest.invited_family_member_ids = [
            i for i in guest.invited_family_member_ids if i != member_id
        ]
        logger.info(f"Removed family member {member_id} from guest {guest_id}")
        return member

    # Read views

    def filtered_and_sorted(
        self,
        search_query: str = "",
        category: str = GuestCategory.ALL.value,
        tab: RsvpTab = RsvpTab.ALL,
        invitation: InvitationFilter = InvitationFilter.ALL,
        sort_by: SortOption = SortOption.NAME,
    ) -> list[Guest]:
        return filter_and_sort(
            self._guests,
            search_query=search_query,
            category=category,
            tab=tab,
            invitation=invitation,
            sort_by=sort_by,
        )

    def stats(self) -> GuestStats:
        return compute_stats(self._guests)
