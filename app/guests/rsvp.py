"""RSVP transitions for guests and their family members.

Statuses move ``Not Invited -> Pending -> Going / Not Going``, and once a
guest is invited any of the three invited statuses can be chosen directly.
Nothing here moves a guest back to ``Not Invited``; only the unrestricted
``update_guest_status`` can do that.

All functions change the guest in place. Unknown family member ids are
ignored rather than reported.
"""
import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from app.models import Guest, RsvpStatus
from app.models.common import unique_ids

logger = logging.getLogger(__name__)


def _stamp_invited(guest: Guest, now: datetime | None) -> None:
    if guest.invited_at is None:
        guest.invited_at = now or datetime.now(UTC)


def send_invite(guest: Guest, now: datetime | None = None) -> Guest:
    """
    Invite a guest.

    Moves the guest to Pending and records when the first invite went out.
    Sending again keeps the original ``invited_at``. Family members are
    not touched.
    """
    guest.status = RsvpStatus.PENDING
    _stamp_invited(guest, now)
    logger.info(f"Invite sent to guest {guest.id}")
    return guest


def send_family_invite(
    guest: Guest,
    member_ids: Iterable[str],
    now: datetime | None = None,
) -> list[str]:
    """
    Invite some of a guest's family members.

    Every listed member found in the family is set to Pending, whatever its
    current status. All listed ids are recorded as invited, including ids
    that match no member. A guest that has not been invited yet is invited
    along with the family.

    Returns the ids of the members whose status was set.
    """
    requested = unique_ids(member_ids)
    updated = []
    for member in guest.family_members:
        if member.id in requested:
            member.rsvp_status = RsvpStatus.PENDING
            updated.append(member.id)

    guest.invited_family_member_ids = unique_ids(
        [*guest.invited_family_member_ids, *requested]
    )

    if guest.status == RsvpStatus.NOT_INVITED:
        guest.status = RsvpStatus.PENDING
        _stamp_invited(guest, now)

    logger.info(
        f"Family invite sent for guest {guest.id}: "
        f"{len(updated)} of {len(requested)} members updated"
    )
    return updated


def update_family_member_rsvp(
    guest: Guest, member_id: str, status: RsvpStatus
) -> bool:
    """Set one family member's status; False when the member is unknown."""
    member = guest.find_family_member(member_id)
    if member is None:
        return False
    member.rsvp_status = status
    logger.info(f"Family member {member_id} of guest {guest.id} is now {status.value}")
    return True


def update_guest_status(guest: Guest, status: RsvpStatus) -> Guest:
    """Set a guest's status directly, without checking the transition."""
    guest.status = status
    logger.info(f"Guest {guest.id} is now {status.value}")
    return guest


def uninvited_family_member_ids(guest: Guest) -> list[str]:
    """Ids of family members that have not been sent an invite yet."""
    invited = set(guest.invited_family_member_ids)
    return [m.id for m in guest.family_members if m.id not in invited]


def can_invite_family(guest: Guest) -> bool:
    """Family invites are offered once the guest has been invited."""
    return bool(guest.family_members) and guest.status != RsvpStatus.NOT_INVITED
