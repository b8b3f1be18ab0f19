from __future__ import annotations

from datetime import date
from typing import Optional

from flask import request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_int
from ..core.exceptions import ValidationError


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def int_arg(name: str) -> int:
    """Required integer query parameter."""

    value = request.args.get(name)
    if value is None or not value.strip():
        raise ValidationError(f"Missing query parameter {name}")
    return require_int(value, name)


def date_arg(name: str) -> Optional[date]:
    value = request.args.get(name)
    if value is None or not value.strip():
        return None
    return parse_iso_date(value)
