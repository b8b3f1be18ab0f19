from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Product:
    """Domain entity: catalog product (plain data, no DB access)."""

    name: str
    description: str
    price: Decimal
    stock: int
    id: Optional[int] = None
