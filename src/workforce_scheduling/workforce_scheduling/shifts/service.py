from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..constraints.base import ConstraintChecker, ConstraintResult
from ..core.exceptions import ConstraintViolationError, ShiftConflictError, ValidationError
from .conflicts import ShiftConflictDetector, validate_bounds
from .model import NewShift, Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftCheck:
    """Read-model of every verdict for a proposed shift."""

    conflict: Optional[Shift]
    constraints: Sequence[ConstraintResult]

    @property
    def allowed(self) -> bool:
        return self.conflict is None and all(r.allowed for r in self.constraints)

    @property
    def first_blocking(self) -> Optional[ConstraintResult]:
        for r in self.constraints:
            if r.blocked:
                return r
        return None


class ShiftService:
    def __init__(
        self,
        shifts: ShiftRepository,
        *,
        detector: Optional[ShiftConflictDetector] = None,
        checkers: Sequence[ConstraintChecker] = (),
    ):
        self._shifts = shifts
        self._detector = detector or ShiftConflictDetector(shifts)
        self._checkers = tuple(checkers)

    def check(
        self,
        owner_id: int,
        start: datetime,
        end: datetime,
        *,
        exclude_shift_id: Optional[int] = None,
    ) -> ShiftCheck:
        validate_bounds(start, end)
        conflict = self._detector.has_overlap(owner_id, start, end, exclude_shift_id)
        results = [c.check(owner_id, start.date(), start, end) for c in self._checkers]
        return ShiftCheck(conflict=conflict, constraints=results)

    def _ensure_allowed(self, shift: NewShift, *, exclude_shift_id: Optional[int] = None) -> None:
        if int(shift.owner_id) <= 0:
            raise ValidationError("Invalid employee")

        validate_bounds(shift.start_at, shift.end_at, shift.paid_break_minutes, shift.unpaid_break_minutes)

        conflict = self._detector.has_overlap(shift.owner_id, shift.start_at, shift.end_at, exclude_shift_id)
        if conflict:
            raise ShiftConflictError(conflict)

        for checker in self._checkers:
            result = checker.check(shift.owner_id, shift.start_at.date(), shift.start_at, shift.end_at)
            if result.blocked:
                logger.info("shift for employee %s blocked: %s", shift.owner_id, result.reason)
                raise ConstraintViolationError(result)

    def create(self, shift: NewShift) -> int:
        self._ensure_allowed(shift)
        shift_id = self._shifts.create(shift)
        logger.info("created shift %s for employee %s", shift_id, shift.owner_id)
        return shift_id

    def update(self, shift_id: int, shift: NewShift) -> None:
        existing = self._shifts.get_by_id(int(shift_id))
        if not existing:
            raise ValidationError("Shift not found")
        if existing.owner_id != shift.owner_id:
            raise ValidationError("Shift belongs to another employee")

        self._ensure_allowed(shift, exclude_shift_id=existing.shift_id)
        if not self._shifts.update(existing.shift_id, shift):
            raise ValidationError("Shift update failed")
