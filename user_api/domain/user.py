"""Domain dataclass for User records (DB-agnostic)."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class User:
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
