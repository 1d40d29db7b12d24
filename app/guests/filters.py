"""Filtering, sorting and statistics over a guest list.

These functions never modify the guests they are given.
"""
import unicodedata
from collections.abc import Iterable

from app.models import (
    Guest,
    GuestCategory,
    GuestStats,
    InvitationFilter,
    RsvpStatus,
    RsvpTab,
    SortOption,
)

# Statuses each tab shows. The Pending tab also lists guests who declined.
TAB_STATUSES: dict[RsvpTab, set[RsvpStatus] | None] = {
    RsvpTab.ALL: None,
    RsvpTab.CONFIRMED: {RsvpStatus.GOING},
    RsvpTab.PENDING: {RsvpStatus.PENDING, RsvpStatus.NOT_GOING},
    RsvpTab.NOT_INVITED: {RsvpStatus.NOT_INVITED},
}


def matches_tab(guest: Guest, tab: RsvpTab) -> bool:
    statuses = TAB_STATUSES[tab]
    return statuses is None or guest.status in statuses


def matches_search(guest: Guest, query: str) -> bool:
    """Case-insensitive match on the name, or raw substring of the phone."""
    if query.lower() in guest.name.lower():
        return True
    return guest.phone is not None and query in guest.phone


def matches_category(guest: Guest, category: str) -> bool:
    return category == GuestCategory.ALL.value or guest.relation == category


def matches_invitation(guest: Guest, invitation: InvitationFilter) -> bool:
    if invitation == InvitationFilter.INVITED:
        return guest.status != RsvpStatus.NOT_INVITED
    if invitation == InvitationFilter.NOT_INVITED:
        return guest.status == RsvpStatus.NOT_INVITED
    return True


def _name_key(guest: Guest) -> tuple[str, str, str]:
    """Accents and case only break ties, as in a locale collation."""
    folded = guest.name.casefold()
    base = "".join(
        c for c in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(c)
    )
    return base, folded, guest.name


def _recent_key(guest: Guest) -> str:
    return guest.created_at.isoformat() if guest.created_at else ""


def _status_key(guest: Guest) -> str:
    return guest.status.value


def sort_guests(guests: Iterable[Guest], sort_by: SortOption) -> list[Guest]:
    """
    Sort guests for display.

    - name: alphabetical, ignoring case and accents
    - recent: newest ``created_at`` first, guests without one last
    - status: alphabetical by status label (Going, Not Going, Not Invited,
      Pending), not by progress through the RSVP flow
    """
    if sort_by == SortOption.RECENT:
        return sorted(guests, key=_recent_key, reverse=True)
    if sort_by == SortOption.STATUS:
        return sorted(guests, key=_status_key)
    return sorted(guests, key=_name_key)


def filter_and_sort(
    guests: Iterable[Guest],
    search_query: str = "",
    category: str = GuestCategory.ALL.value,
    tab: RsvpTab = RsvpTab.ALL,
    invitation: InvitationFilter = InvitationFilter.ALL,
    sort_by: SortOption = SortOption.NAME,
) -> list[Guest]:
    """Apply every filter (all must match), then sort the survivors."""
    if isinstance(category, GuestCategory):
        category = category.value
    result = [
        guest
        for guest in guests
        if matches_tab(guest, tab)
        and matches_search(guest, search_query)
        and matches_category(guest, category)
        and matches_invitation(guest, invitation)
    ]
    return sort_guests(result, sort_by)


def compute_stats(guests: Iterable[Guest]) -> GuestStats:
    """Count guests per status plus head count including plus-ones."""
    stats = GuestStats()
    for guest in guests:
        if guest.status == RsvpStatus.GOING:
            stats.going += 1
        elif guest.status == RsvpStatus.PENDING:
            stats.pending += 1
        elif guest.status == RsvpStatus.NOT_GOING:
            stats.not_going += 1
        else:
            stats.not_invited += 1
        if guest.status != RsvpStatus.NOT_INVITED:
            stats.invited_guests += 1
        stats.total_guests += 2 if guest.has_plus_one else 1
    return stats
