"""Helpers shared by the planner models."""

from collections.abc import Iterable
from uuid import uuid4


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return str(uuid4())


def unique_ids(ids: Iterable[str]) -> list[str]:
    """Drop repeated ids while keeping first-seen order."""
    seen: set[str] = set()
    result = []
    for value in ids:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
