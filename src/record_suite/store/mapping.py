from __future__ import annotations

import dataclasses
import typing
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Tuple, Type


def _unwrap_optional(tp: Any) -> Any:
    if typing.get_origin(tp) is typing.Union:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def decode_value(tp: Any, value: Any) -> Any:
    if value is None:
        return None
    tp = _unwrap_optional(tp)
    if isinstance(tp, type):
        if issubclass(tp, Enum):
            return tp(value)
        if tp is bool:
            return bool(value)
        if tp is int:
            return int(value)
        if tp is Decimal:
            return Decimal(str(value))
        if tp is datetime:
            return value
        if tp is date and isinstance(value, datetime):
            return value.date()
    return value


def encode_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return int(value)
    return value


@dataclass(frozen=True)
class EntityMapping:
    """Maps an entity dataclass onto a table (one column per field, ``id`` as key)."""

    entity_type: Type[Any]
    table: str
    unique: Tuple[Tuple[str, ...], ...] = ()

    @property
    def columns(self) -> list[str]:
        return [f.name for f in dataclasses.fields(self.entity_type) if f.name != "id"]

    def _hints(self) -> Dict[str, Any]:
        return typing.get_type_hints(self.entity_type)

    def to_row(self, entity: Any) -> Dict[str, Any]:
        return {name: encode_value(getattr(entity, name)) for name in self.columns}

    def from_row(self, row: Mapping[str, Any]) -> Any:
        hints = self._hints()
        values = {name: decode_value(hints[name], row.get(name)) for name in self.columns}
        return self.entity_type(**values, id=int(row["id"]))
