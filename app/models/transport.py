"""Transport route model."""

from sqlmodel import Field, SQLModel

from app.models.common import new_id


class TransportRoute(SQLModel):
    """A scheduled leg vehicles run between two places.

    Times are kept as entered (e.g. "09:30") since routes are only
    displayed, never scheduled against.
    """

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    pickup_location: str = Field(min_length=1)
    dropoff_location: str = Field(min_length=1)
    departure_time: str | None = None
    arrival_time: str | None = None
