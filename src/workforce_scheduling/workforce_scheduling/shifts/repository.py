from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewShift, Shift


class ShiftRepository(Protocol):
    def list_for_owner(self, owner_id: int) -> Sequence[Shift]:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def create(self, shift: NewShift) -> int:
        """Persist a validated shift. Returns shift_id."""

        raise NotImplementedError

    def update(self, shift_id: int, shift: NewShift) -> bool:
        raise NotImplementedError
