from __future__ import annotations

import dataclasses
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable

# Never sent to clients.
PRIVATE_FIELDS = {"password_hash"}


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value


def to_json(entity: Any) -> dict:
    """Convert an entity dataclass into a JSON-ready dict."""

    return {
        f.name: _plain(getattr(entity, f.name))
        for f in dataclasses.fields(entity)
        if f.name not in PRIVATE_FIELDS
    }


def to_json_list(entities: Iterable[Any]) -> list[dict]:
    return [to_json(e) for e in entities]
