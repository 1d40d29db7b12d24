"""Family member models.

A family member belongs to exactly one guest and is stored inside that
guest's ``family_members`` list. Its RSVP status is tracked separately
from the parent guest's status.
"""

from sqlmodel import Field, SQLModel

from app.models.common import new_id
from app.models.enums import RsvpStatus


class FamilyMemberBase(SQLModel):
    """Fields shared by stored family members and create payloads."""

    name: str = Field(min_length=1)
    relation: str | None = None
    age: int | None = Field(default=None, ge=0)
    rsvp_status: RsvpStatus | None = None
    dietary_restrictions: list[str] = Field(default_factory=list)
    meal_preference: str | None = None


class FamilyMember(FamilyMemberBase):
    """A person travelling with a guest.

    Attributes:
        id: Identifier, unique within the owning guest's family list.
        name: Display name.
        relation: Relation to the guest (spouse, child, ...).
        age: Age in years, if known.
        rsvp_status: Attendance status. None until the member has been
            invited; set independently of the parent guest's status.
        dietary_restrictions: Free-form restrictions, passed through as-is.
        meal_preference: Free-form meal choice, passed through as-is.
    """

    id: str = Field(default_factory=new_id)


class FamilyMemberCreate(FamilyMemberBase):
    """Data required to add a family member to a guest."""


class FamilyMemberUpdate(SQLModel):
    """Fields that can be edited on a family member."""

    name: str | None = Field(default=None, min_length=1)
    relation: str | None = None
    age: int | None = Field(default=None, ge=0)
    dietary_restrictions: list[str] | None = None
    meal_preference: str | None = None
