from app.models.budget import (
    BudgetCategory,
    BudgetItem,
    BudgetItemCreate,
    BudgetItemUpdate,
    BudgetSummary,
)
from app.models.enums import (
    GuestCategory,
    GuestSource,
    InvitationFilter,
    ResourceKind,
    RoomType,
    RsvpStatus,
    RsvpTab,
    SortOption,
    TableShape,
    VehicleType,
)
from app.models.family import FamilyMember, FamilyMemberCreate, FamilyMemberUpdate
from app.models.guest import Guest, GuestCreate, GuestStats, GuestUpdate
from app.models.person import Person
from app.models.resource import (
    TABLE_TEMPLATES,
    Resource,
    ResourceOverview,
    Room,
    SeatingGroup,
    Table,
    TableTemplate,
    Vehicle,
)
from app.models.snapshot import PlannerSnapshot, PlannerSnapshotRecord
from app.models.transport import TransportRoute

__all__ = [
    "TABLE_TEMPLATES",
    "BudgetCategory",
    "BudgetItem",
    "BudgetItemCreate",
    "BudgetItemUpdate",
    "BudgetSummary",
    "FamilyMember",
    "FamilyMemberCreate",
    "FamilyMemberUpdate",
    "Guest",
    "GuestCategory",
    "GuestCreate",
    "GuestSource",
    "GuestStats",
    "GuestUpdate",
    "InvitationFilter",
    "Person",
    "PlannerSnapshot",
    "PlannerSnapshotRecord",
    "Resource",
    "ResourceKind",
    "ResourceOverview",
    "Room",
    "RoomType",
    "RsvpStatus",
    "RsvpTab",
    "SeatingGroup",
    "SortOption",
    "Table",
    "TableShape",
    "TableTemplate",
    "TransportRoute",
    "Vehicle",
    "VehicleType",
]
