"""Enumeration types shared by the planner models."""

from enum import Enum


class RsvpStatus(str, Enum):
    """Attendance status of a guest or family member.

    Values are the labels shown to users; sorting by status compares
    these labels lexicographically.
    """

    GOING = "Going"
    PENDING = "Pending"
    NOT_GOING = "Not Going"
    NOT_INVITED = "Not Invited"


class GuestSource(str, Enum):
    """Where a guest record came from."""

    MANUAL = "manual"
    EXCEL = "excel"
    CONTACT = "contact"
    RSVP = "rsvp"


class GuestCategory(str, Enum):
    """Relation categories offered by the guest list filters."""

    ALL = "All"
    FAMILY = "Family"
    FRIEND = "Friend"
    COLLEAGUE = "Colleague"
    RELATIVE = "Relative"
    NEIGHBOR = "Neighbor"
    OTHER = "Other"


class RsvpTab(str, Enum):
    """Tabs of the guest list screen."""

    ALL = "All"
    CONFIRMED = "Confirmed"
    PENDING = "Pending"
    NOT_INVITED = "Not Invited"


class InvitationFilter(str, Enum):
    """Invitation filter of the guest list screen."""

    ALL = "All"
    INVITED = "Invited"
    NOT_INVITED = "Not Invited"


class SortOption(str, Enum):
    """Sort orders of the guest list screen."""

    NAME = "name"
    RECENT = "recent"
    STATUS = "status"


class ResourceKind(str, Enum):
    """Kinds of capacity-bounded resources guests can be assigned to."""

    ROOM = "room"
    VEHICLE = "vehicle"
    TABLE = "table"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class RoomType(str, Enum):
    """Room types offered by an accommodation booking."""

    SINGLE = "single"
    DOUBLE = "double"
    SUITE = "suite"
    VILLA = "villa"


class VehicleType(str, Enum):
    """Vehicle types offered by a transport booking."""

    CAR = "car"
    BUS = "bus"
    SHUTTLE = "shuttle"
    LIMO = "limo"


class TableShape(str, Enum):
    """Table shapes on the seating plan."""

    RECTANGLE = "rectangle"
    CIRCLE = "circle"
