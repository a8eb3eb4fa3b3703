from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class ConstraintResult:
    allowed: bool
    blocked: bool
    reason: Optional[str] = None
    requires_override: bool = False

    @classmethod
    def allow(cls, reason: Optional[str] = None) -> "ConstraintResult":
        return cls(allowed=True, blocked=False, reason=reason)

    @classmethod
    def block(cls, reason: str, *, requires_override: bool = False) -> "ConstraintResult":
        return cls(allowed=False, blocked=True, reason=reason, requires_override=requires_override)


class ConstraintChecker(ABC):
    """Strategy Pattern: decide whether a proposed shift is permitted."""

    @abstractmethod
    def check(self, owner_id: int, day: date, start: datetime, end: datetime) -> ConstraintResult:
        raise NotImplementedError
