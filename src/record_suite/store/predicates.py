"""Single-field filters understood by every record store.

The in-memory store evaluates them with ``matches``; the MySQL store compiles
them into a WHERE clause.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match on a text field."""

    field: str
    text: str

    def matches(self, entity: Any) -> bool:
        value = getattr(entity, self.field)
        if value is None:
            return False
        return self.text.lower() in str(value).lower()


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any
    ignore_case: bool = False

    def matches(self, entity: Any) -> bool:
        value = getattr(entity, self.field)
        if self.ignore_case and isinstance(value, str) and isinstance(self.value, str):
            return value.lower() == self.value.lower()
        return value == self.value


@dataclass(frozen=True)
class Before:
    """Strict ``field < value``; records with a NULL field never match."""

    field: str
    value: Any

    def matches(self, entity: Any) -> bool:
        value = getattr(entity, self.field)
        return value is not None and value < self.value


@dataclass(frozen=True)
class In:
    field: str
    values: Tuple[Any, ...]

    def matches(self, entity: Any) -> bool:
        return getattr(entity, self.field) in self.values


class All:
    """Conjunction of other predicates."""

    def __init__(self, *predicates: Any):
        self.predicates: Tuple[Any, ...] = tuple(predicates)

    def matches(self, entity: Any) -> bool:
        return all(p.matches(entity) for p in self.predicates)
