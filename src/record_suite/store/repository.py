from __future__ import annotations

from typing import Any, ContextManager, Optional, Protocol, Sequence, Type, TypeVar

T = TypeVar("T")


class RecordStore(Protocol):
    """Generic persistence keyed by entity type and integer id.

    Note (DIP): services depend on this interface, never on a concrete database.
    Entities are frozen dataclasses whose last field is ``id``; ``save`` inserts
    when ``id`` is None and returns the stored copy with its id assigned.
    """

    def get(self, entity_type: Type[T], entity_id: int, *, for_update: bool = False) -> Optional[T]:
        raise NotImplementedError

    def require(self, entity_type: Type[T], entity_id: int, *, for_update: bool = False) -> T:
        """Like ``get`` but raises NotFoundError when the record is missing."""

        raise NotImplementedError

    def save(self, entity_type: Type[T], entity: T) -> T:
        raise NotImplementedError

    def delete(self, entity_type: Type[T], entity_id: int) -> None:
        raise NotImplementedError

    def find_all(self, entity_type: Type[T]) -> Sequence[T]:
        raise NotImplementedError

    def find_where(self, entity_type: Type[T], predicate: Any) -> Sequence[T]:
        raise NotImplementedError

    def transaction(self) -> ContextManager["RecordStore"]:
        """Unit of work: everything inside commits together or not at all.

        Reads made with ``for_update=True`` inside the block hold their lock
        until the block exits.
        """

        raise NotImplementedError
