from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

import mysql.connector
from loguru import logger

from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import DUPLICATE_KEY_ERRNO, db_cursor, fetchall, fetchone
from .mapping import EntityMapping, encode_value
from .predicates import All, Before, Contains, Equals, In
from .repository import RecordStore

T = TypeVar("T")


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def compile_predicate(predicate: Any, mapping: EntityMapping) -> Tuple[str, List[Any]]:
    """Translate a predicate into a ``(where_clause, params)`` pair."""

    if isinstance(predicate, All):
        if not predicate.predicates:
            return "1=1", []
        clauses: List[str] = []
        params: List[Any] = []
        for p in predicate.predicates:
            clause, p_params = compile_predicate(p, mapping)
            clauses.append(f"({clause})")
            params.extend(p_params)
        return " AND ".join(clauses), params

    column = _column(predicate.field, mapping)
    if isinstance(predicate, Contains):
        return f"LOWER({column}) LIKE %s", [f"%{_escape_like(predicate.text.lower())}%"]
    if isinstance(predicate, Equals):
        if predicate.ignore_case and isinstance(predicate.value, str):
            return f"LOWER({column}) = %s", [predicate.value.lower()]
        if predicate.value is None:
            return f"{column} IS NULL", []
        return f"{column} = %s", [encode_value(predicate.value)]
    if isinstance(predicate, Before):
        return f"{column} < %s", [encode_value(predicate.value)]
    if isinstance(predicate, In):
        if not predicate.values:
            return "1=0", []
        marks = ",".join(["%s"] * len(predicate.values))
        return f"{column} IN ({marks})", [encode_value(v) for v in predicate.values]
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def _column(field: str, mapping: EntityMapping) -> str:
    if field != "id" and field not in mapping.columns:
        raise ValueError(f"Unknown field {field!r} for table {mapping.table}")
    return field


class MySQLRecordStore(RecordStore):
    """Record store over mysql-connector.

    Outside ``transaction()`` every call runs on its own short-lived connection.
    Inside, the calls made by the same thread share one connection and the
    whole block commits or rolls back together.
    """

    def __init__(self, conn_factory: DatabaseConnection, mappings: Sequence[EntityMapping]):
        self._conn_factory = conn_factory
        self._mappings: Dict[type, EntityMapping] = {m.entity_type: m for m in mappings}
        self._local = threading.local()

    def _mapping(self, entity_type: type) -> EntityMapping:
        try:
            return self._mappings[entity_type]
        except KeyError:
            raise ValueError(f"No table mapping for {entity_type.__name__}")

    @contextmanager
    def transaction(self) -> Iterator["MySQLRecordStore"]:
        if getattr(self._local, "cursor", None) is not None:
            yield self
            return

        with db_cursor(self._conn_factory) as (conn, cur):
            conn.start_transaction()
            self._local.cursor = cur
            try:
                yield self
            finally:
                self._local.cursor = None

    @contextmanager
    def _cursor(self):
        active = getattr(self._local, "cursor", None)
        if active is not None:
            yield active
            return
        with db_cursor(self._conn_factory) as (_, cur):
            yield cur

    def get(self, entity_type: Type[T], entity_id: int, *, for_update: bool = False) -> Optional[T]:
        mapping = self._mapping(entity_type)
        columns = ", ".join(["id", *mapping.columns])
        lock = " FOR UPDATE" if for_update else ""
        with self._cursor() as cur:
            cur.execute(f"SELECT {columns} FROM {mapping.table} WHERE id=%s{lock}", (int(entity_id),))
            row = fetchone(cur)
            if not row:
                return None
            return mapping.from_row(row)

    def require(self, entity_type: Type[T], entity_id: int, *, for_update: bool = False) -> T:
        entity = self.get(entity_type, entity_id, for_update=for_update)
        if entity is None:
            raise NotFoundError(f"{entity_type.__name__} {entity_id} not found")
        return entity

    def save(self, entity_type: Type[T], entity: T) -> T:
        mapping = self._mapping(entity_type)
        row = mapping.to_row(entity)
        entity_id = getattr(entity, "id")

        try:
            with self._cursor() as cur:
                if entity_id is None:
                    names = ", ".join(row)
                    marks = ",".join(["%s"] * len(row))
                    cur.execute(f"INSERT INTO {mapping.table}({names}) VALUES({marks})", tuple(row.values()))
                    new_id = int(cur.lastrowid)
                else:
                    assignments = ", ".join(f"{name}=%s" for name in row)
                    cur.execute(
                        f"UPDATE {mapping.table} SET {assignments} WHERE id=%s",
                        (*row.values(), int(entity_id)),
                    )
                    new_id = int(entity_id)
                    if cur.rowcount == 0:
                        cur.execute(f"SELECT id FROM {mapping.table} WHERE id=%s", (new_id,))
                        if not fetchone(cur):
                            raise NotFoundError(f"{entity_type.__name__} {entity_id} not found")
        except mysql.connector.errors.IntegrityError as e:
            if getattr(e, "errno", None) == DUPLICATE_KEY_ERRNO:
                logger.warning("Duplicate key on {}: {}", mapping.table, e)
                raise ConflictError(f"Duplicate {entity_type.__name__}") from e
            raise

        return mapping.from_row({**row, "id": new_id})

    def delete(self, entity_type: Type[T], entity_id: int) -> None:
        mapping = self._mapping(entity_type)
        with self._cursor() as cur:
            cur.execute(f"DELETE FROM {mapping.table} WHERE id=%s", (int(entity_id),))
            if cur.rowcount == 0:
                raise NotFoundError(f"{entity_type.__name__} {entity_id} not found")

    def find_all(self, entity_type: Type[T]) -> Sequence[T]:
        return self.find_where(entity_type, All())

    def find_where(self, entity_type: Type[T], predicate: Any) -> Sequence[T]:
        mapping = self._mapping(entity_type)
        where, params = compile_predicate(predicate, mapping)
        columns = ", ".join(["id", *mapping.columns])
        with self._cursor() as cur:
            cur.execute(f"SELECT {columns} FROM {mapping.table} WHERE {where} ORDER BY id", tuple(params))
            return [mapping.from_row(r) for r in fetchall(cur)]
