from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    name: str
    email: str
    age: int
    course: str
    id: Optional[int] = None
