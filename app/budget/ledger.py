"""Budget line items for one event."""
import logging
from collections.abc import Iterable
from typing import Any

from app.budget.summary import summarize, toggle_paid
from app.models import (
    BudgetCategory,
    BudgetItem,
    BudgetItemCreate,
    BudgetItemUpdate,
    BudgetSummary,
)

logger = logging.getLogger(__name__)

DEFAULT_BUDGET_CATEGORIES: list[BudgetCategory] = [
    BudgetCategory(name="Venue", icon="location", color="#8B5CF6"),
    BudgetCategory(name="Catering", icon="restaurant", color="#F59E0B"),
    BudgetCategory(name="Photography", icon="camera", color="#EC4899"),
    BudgetCategory(name="Decoration", icon="color-palette", color="#10B981"),
    BudgetCategory(name="Entertainment", icon="musical-notes", color="#6366F1"),
    BudgetCategory(name="Attire", icon="shirt", color="#14B8A6"),
]


class BudgetLedger:
    """Holds the budget items of an event and keeps them in entry order."""

    def __init__(self, items: Iterable[BudgetItem] | None = None) -> None:
        self._items: list[BudgetItem] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def all(self) -> list[BudgetItem]:
        return list(self._items)

    def get(self, item_id: str) -> BudgetItem | None:
        return next((i for i in self._items if i.id == item_id), None)

    def add(self, item: BudgetItemCreate | dict[str, Any]) -> BudgetItem:
        if isinstance(item, dict):
            item = BudgetItemCreate.model_validate(item)
        new_item = BudgetItem.model_validate(item)
        self._items.append(new_item)
        logger.info(f"Added budget item {new_item.id} ({new_item.category})")
        return new_item

    def add_default_categories(self) -> list[BudgetItem]:
        """Start an empty budget with one zeroed item per preset category."""
        return [
            self.add(BudgetItemCreate(category=c.name, icon=c.icon, color=c.color))
            for c in DEFAULT_BUDGET_CATEGORIES
        ]

    def update(
        self, item_id: str, updates: BudgetItemUpdate | dict[str, Any]
    ) -> BudgetItem | None:
        if isinstance(updates, dict):
            updates = BudgetItemUpdate.model_validate(updates)
        index = next(
            (n for n, i in enumerate(self._items) if i.id == item_id), None
        )
        if index is None:
            return None
        changes = {name: getattr(updates, name) for name in updates.model_fields_set}
        updated = BudgetItem.model_validate(self._items[index], update=changes)
        self._items[index] = updated
        return updated

    def remove(self, item_id: str) -> BudgetItem | None:
        item = self.get(item_id)
        if item is not None:
            self._items.remove(item)
            logger.info(f"Removed budget item {item_id}")
        return item

    def toggle_paid(self, item_id: str) -> BudgetItem | None:
        """Flip the paid flag; returns the updated item or None if unknown."""
        if self.get(item_id) is None:
            return None
        self._items = toggle_paid(self._items, item_id)
        return self.get(item_id)

    def summary(self) -> BudgetSummary:
        return summarize(self._items)
