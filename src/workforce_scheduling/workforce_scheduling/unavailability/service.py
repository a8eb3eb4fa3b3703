from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_local_time
from ..common.validators import (
    require_non_empty,
    require_ordered_bounds,
    require_times_unless_all_day,
    require_weekdays,
)
from ..core.enums import ExceptionKind, RuleStatus
from ..core.exceptions import ValidationError
from ..windows.model import ResolvedDay
from .model import NewRecurrenceRule, NewRuleException
from .repository import UnavailabilityRepository
from .resolver import ScheduleResolver

logger = logging.getLogger(__name__)


class UnavailabilityService:
    """Validates rule/exception input before it reaches the repository.

    The resolution engine assumes validated records; this is the boundary
    where malformed ones are rejected.
    """

    def __init__(self, rules: UnavailabilityRepository, resolver: Optional[ScheduleResolver] = None):
        self._rules = rules
        self._resolver = resolver or ScheduleResolver(rules)

    @staticmethod
    def build_rule(
        *,
        owner_id: int,
        weekdays: Iterable[int],
        all_day: bool,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        timezone: str,
        effective_from: Optional[date] = None,
        effective_to: Optional[date] = None,
        status: RuleStatus = RuleStatus.ACTIVE,
        note: Optional[str] = None,
    ) -> NewRecurrenceRule:
        if int(owner_id) <= 0:
            raise ValidationError("Invalid employee")

        days = require_weekdays(weekdays)
        start_t = None if all_day else parse_local_time(start_time)
        end_t = None if all_day else parse_local_time(end_time)
        # Overnight windows (end before start) are legal.
        require_times_unless_all_day(all_day, start_t, end_t)
        require_ordered_bounds(effective_from, effective_to)

        return NewRecurrenceRule(
            owner_id=int(owner_id),
            weekdays=days,
            all_day=bool(all_day),
            start_time=start_t,
            end_time=end_t,
            timezone=require_non_empty(timezone, "timezone"),
            effective_from=effective_from,
            effective_to=effective_to,
            status=RuleStatus(status),
            note=note.strip() if note else None,
        )

    def add_rule(self, **fields) -> int:
        rule = self.build_rule(**fields)
        rule_id = self._rules.create_rule(rule)
        logger.info("created unavailability rule %s for employee %s", rule_id, rule.owner_id)
        return rule_id

    def add_rules(self, *, owner_id: int, rules: Sequence[Mapping[str, Any]]) -> List[int]:
        """All-or-nothing: every rule is validated before any is stored."""
        if not rules:
            raise ValidationError("At least one rule is required")

        built = []
        for index, fields in enumerate(rules):
            try:
                built.append(self.build_rule(owner_id=owner_id, **fields))
            except ValidationError as e:
                raise ValidationError(f"Rule {index + 1}: {e}")

        rule_ids = list(self._rules.create_rules(built))
        logger.info("created %d unavailability rules for employee %s", len(rule_ids), owner_id)
        return rule_ids

    def add_exception(
        self,
        *,
        owner_id: int,
        day: date,
        kind: ExceptionKind,
        all_day: bool,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        timezone: str,
        note: Optional[str] = None,
    ) -> int:
        if int(owner_id) <= 0:
            raise ValidationError("Invalid employee")

        try:
            kind = ExceptionKind(kind)
        except ValueError:
            raise ValidationError(f"Unknown exception type {kind!r}")

        start_t = None if all_day else parse_local_time(start_time)
        end_t = None if all_day else parse_local_time(end_time)
        require_times_unless_all_day(all_day, start_t, end_t)

        exception_id = self._rules.create_exception(
            NewRuleException(
                owner_id=int(owner_id),
                date=day,
                kind=kind,
                all_day=bool(all_day),
                start_time=start_t,
                end_time=end_t,
                timezone=require_non_empty(timezone, "timezone"),
                note=note.strip() if note else None,
            )
        )
        logger.info("created %s exception %s for employee %s on %s", kind.value, exception_id, owner_id, day)
        return exception_id

    def resolved(self, owner_id: int, start: date, end: date) -> List[ResolvedDay]:
        return self._resolver.resolve(owner_id, start, end)
