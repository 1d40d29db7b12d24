"""Assignable person references."""

from sqlmodel import Field, SQLModel


class Person(SQLModel):
    """Anyone that can be placed in a room or vehicle.

    Attributes:
        id: Id of the guest or family member.
        name: Display name.
        guest_id: Id of the owning guest (same as ``id`` for a guest).
        is_family_member: True when this references a family member.
    """

    id: str
    name: str
    guest_id: str
    is_family_member: bool = Field(default=False)
