from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .availability.mysql_availability_repository import MySQLAvailabilityRepository
from .availability.repository import AvailabilityRepository
from .availability.service import AvailabilityService
from .constraints.availability_checker import AvailabilityConstraintChecker
from .constraints.unavailability_checker import UnavailabilityConstraintChecker
from .core.constants import (
    DEFAULT_RATE_LIMIT_CAPACITY,
    DEFAULT_RATE_LIMIT_MAX_REQUESTS,
    DEFAULT_RATE_LIMIT_WINDOW_SECONDS,
)
from .database.connection import DatabaseConnection, DBConfig
from .ratelimit.limiter import FixedWindowRateLimiter
from .shifts.conflicts import ShiftConflictDetector
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService
from .unavailability.mysql_unavailability_repository import MySQLUnavailabilityRepository
from .unavailability.repository import UnavailabilityRepository
from .unavailability.resolver import ScheduleResolver
from .unavailability.service import UnavailabilityService


@dataclass(frozen=True)
class Container:
    unavailability_repo: UnavailabilityRepository
    availability_repo: AvailabilityRepository
    shifts_repo: ShiftRepository

    resolver: ScheduleResolver
    unavailability_service: UnavailabilityService
    availability_service: AvailabilityService
    shift_service: ShiftService
    rate_limiter: FixedWindowRateLimiter


def wire(
    *,
    unavailability_repo: UnavailabilityRepository,
    availability_repo: AvailabilityRepository,
    shifts_repo: ShiftRepository,
    rate_limiter: Optional[FixedWindowRateLimiter] = None,
) -> Container:
    """Build services on top of any repository implementations."""
    resolver = ScheduleResolver(unavailability_repo)
    shift_service = ShiftService(
        shifts_repo,
        detector=ShiftConflictDetector(shifts_repo),
        checkers=(
            UnavailabilityConstraintChecker(resolver),
            AvailabilityConstraintChecker(availability_repo),
        ),
    )

    return Container(
        unavailability_repo=unavailability_repo,
        availability_repo=availability_repo,
        shifts_repo=shifts_repo,
        resolver=resolver,
        unavailability_service=UnavailabilityService(unavailability_repo, resolver),
        availability_service=AvailabilityService(availability_repo),
        shift_service=shift_service,
        rate_limiter=rate_limiter if rate_limiter is not None else FixedWindowRateLimiter(),
    )


def build_container(*, db_config: Mapping[str, object], rate_limit: Optional[Mapping[str, object]] = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    rate_limit = rate_limit or {}

    limiter = FixedWindowRateLimiter(
        max_requests=int(rate_limit.get("max_requests", DEFAULT_RATE_LIMIT_MAX_REQUESTS)),
        window_seconds=float(rate_limit.get("window_seconds", DEFAULT_RATE_LIMIT_WINDOW_SECONDS)),
        capacity=int(rate_limit.get("capacity", DEFAULT_RATE_LIMIT_CAPACITY)),
    )

    return wire(
        unavailability_repo=MySQLUnavailabilityRepository(conn),
        availability_repo=MySQLAvailabilityRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        rate_limiter=limiter,
    )
