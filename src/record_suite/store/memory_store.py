from __future__ import annotations

import dataclasses
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Sequence, Type, TypeVar

from loguru import logger

from ..core.exceptions import ConflictError, NotFoundError
from .mapping import EntityMapping
from .repository import RecordStore

T = TypeVar("T")


class InMemoryRecordStore(RecordStore):
    """Dict-backed record store.

    A single re-entrant lock serializes units of work, which is enough to make
    the check-then-write sequences of the engines atomic. A failed transaction
    restores the tables as they were when it started.
    """

    def __init__(self, mappings: Sequence[EntityMapping] = ()):
        self._unique = {m.entity_type: m.unique for m in mappings}
        self._tables: Dict[type, Dict[int, Any]] = {}
        self._next_ids: Dict[type, int] = {}
        self._lock = threading.RLock()
        self._depth = 0

    def _table(self, entity_type: type) -> Dict[int, Any]:
        return self._tables.setdefault(entity_type, {})

    @contextmanager
    def transaction(self) -> Iterator["InMemoryRecordStore"]:
        with self._lock:
            outermost = self._depth == 0
            snapshot = None
            if outermost:
                snapshot = ({t: dict(rows) for t, rows in self._tables.items()}, dict(self._next_ids))
            self._depth += 1
            try:
                yield self
            except Exception:
                if snapshot is not None:
                    self._tables, self._next_ids = snapshot
                    logger.debug("In-memory transaction rolled back")
                raise
            finally:
                self._depth -= 1

    def get(self, entity_type: Type[T], entity_id: int, *, for_update: bool = False) -> Optional[T]:
        with self._lock:
            return self._table(entity_type).get(int(entity_id))

    def require(self, entity_type: Type[T], entity_id: int, *, for_update: bool = False) -> T:
        entity = self.get(entity_type, entity_id, for_update=for_update)
        if entity is None:
            raise NotFoundError(f"{entity_type.__name__} {entity_id} not found")
        return entity

    def _check_unique(self, entity_type: type, entity: Any) -> None:
        for key in self._unique.get(entity_type, ()):
            wanted = tuple(getattr(entity, f) for f in key)
            for other in self._table(entity_type).values():
                if other.id != entity.id and tuple(getattr(other, f) for f in key) == wanted:
                    raise ConflictError(f"Duplicate {entity_type.__name__} for {', '.join(key)}")

    def save(self, entity_type: Type[T], entity: T) -> T:
        with self._lock:
            table = self._table(entity_type)
            entity_id = getattr(entity, "id")
            if entity_id is not None and int(entity_id) not in table:
                raise NotFoundError(f"{entity_type.__name__} {entity_id} not found")

            self._check_unique(entity_type, entity)

            if entity_id is None:
                entity_id = self._next_ids.get(entity_type, 0) + 1
                self._next_ids[entity_type] = entity_id
                entity = dataclasses.replace(entity, id=entity_id)
            table[int(entity_id)] = entity
            return entity

    def delete(self, entity_type: Type[T], entity_id: int) -> None:
        with self._lock:
            table = self._table(entity_type)
            if table.pop(int(entity_id), None) is None:
                raise NotFoundError(f"{entity_type.__name__} {entity_id} not found")

    def find_all(self, entity_type: Type[T]) -> Sequence[T]:
        with self._lock:
            return list(self._table(entity_type).values())

    def find_where(self, entity_type: Type[T], predicate: Any) -> Sequence[T]:
        with self._lock:
            return [e for e in self._table(entity_type).values() if predicate.matches(e)]
