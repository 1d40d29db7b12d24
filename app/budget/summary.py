"""Budget rollups."""
import math
from collections.abc import Iterable, Sequence

from app.models import BudgetItem, BudgetSummary


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def summarize(items: Sequence[BudgetItem]) -> BudgetSummary:
    """
    Total a list of budget items.

    ``percent_used`` is the share of the estimate already spent, rounded
    to a whole percent, and 0 when nothing has been estimated.
    """
    total_estimated = sum(item.estimated for item in items)
    total_actual = sum(item.actual for item in items)
    total_paid = sum(item.actual for item in items if item.is_paid)
    percent_used = (
        _round_half_up(total_actual / total_estimated * 100)
        if total_estimated > 0
        else 0
    )
    return BudgetSummary(
        total_estimated=total_estimated,
        total_actual=total_actual,
        total_paid=total_paid,
        total_pending=total_actual - total_paid,
        remaining=total_estimated - total_actual,
        percent_used=percent_used,
        is_over_budget=total_actual > total_estimated,
        category_count=len(items),
    )


def toggle_paid(items: Iterable[BudgetItem], item_id: str) -> list[BudgetItem]:
    """Return a new list with ``is_paid`` flipped on the matching item only."""
    return [
        item.model_copy(update={"is_paid": not item.is_paid})
        if item.id == item_id
        else item
        for item in items
    ]
