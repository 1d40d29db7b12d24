"""Budget line item models."""

from sqlmodel import Field, SQLModel

from app.models.common import new_id


class BudgetItemBase(SQLModel):
    """Fields shared by stored budget items and create payloads."""

    category: str = Field(min_length=1)
    icon: str | None = None
    color: str | None = None
    estimated: float = Field(default=0, ge=0)
    actual: float = Field(default=0, ge=0)
    is_paid: bool = Field(default=False)


class BudgetItem(BudgetItemBase):
    """One category of spending with its estimate and actual cost.

    Attributes:
        id: Opaque unique identifier.
        category: Spending category (Venue, Catering, ...).
        icon: Icon name used by the budget screen.
        color: Display colour.
        estimated: Planned amount.
        actual: Amount actually spent.
        is_paid: Whether ``actual`` has been paid.
    """

    id: str = Field(default_factory=new_id)

    @property
    def remaining(self) -> float:
        return self.estimated - self.actual

    @property
    def is_over_budget(self) -> bool:
        return self.actual > self.estimated


class BudgetItemCreate(BudgetItemBase):
    """Data required to add a budget item."""


class BudgetItemUpdate(SQLModel):
    """Fields that can be edited on a budget item."""

    category: str | None = Field(default=None, min_length=1)
    icon: str | None = None
    color: str | None = None
    estimated: float | None = Field(default=None, ge=0)
    actual: float | None = Field(default=None, ge=0)
    is_paid: bool | None = None


class BudgetCategory(SQLModel):
    """A preset category offered when adding budget items."""

    name: str
    icon: str
    color: str


class BudgetSummary(SQLModel):
    """Rollup of a list of budget items."""

    total_estimated: float = 0
    total_actual: float = 0
    total_paid: float = 0
    total_pending: float = 0
    remaining: float = 0
    percent_used: int = 0
    is_over_budget: bool = False
    category_count: int = 0
