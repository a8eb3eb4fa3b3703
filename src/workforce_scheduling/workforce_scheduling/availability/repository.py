from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Availability, AvailabilityOverride, AvailabilityWindow


class AvailabilityRepository(Protocol):
    def get_for_owner(self, owner_id: int) -> Optional[Availability]:
        """Availability with its windows and all overrides, or None."""

        raise NotImplementedError

    def upsert(
        self,
        *,
        owner_id: int,
        windows: Sequence[AvailabilityWindow],
        effective_from: Optional[date],
        effective_to: Optional[date],
    ) -> int:
        """Create or replace the availability definition.

        Returns availability_id.
        """

        raise NotImplementedError

    def create_override(self, *, availability_id: int, override: AvailabilityOverride) -> int:
        raise NotImplementedError
