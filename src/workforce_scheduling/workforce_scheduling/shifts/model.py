from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """Domain entity: a persisted shift of one employee."""

    shift_id: int
    owner_id: int
    start_at: datetime
    end_at: datetime
    paid_break_minutes: int = 0
    unpaid_break_minutes: int = 0
    note: Optional[str] = None


@dataclass(frozen=True)
class NewShift:
    owner_id: int
    start_at: datetime
    end_at: datetime
    paid_break_minutes: int = 0
    unpaid_break_minutes: int = 0
    note: Optional[str] = None
