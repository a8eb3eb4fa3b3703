from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import NewRecurrenceRule, NewRuleException, RecurrenceRule, RuleException


class UnavailabilityRepository(Protocol):
    def list_rules(self, *, owner_id: int, start: date, end: date) -> Sequence[RecurrenceRule]:
        """Active rules whose effective window intersects [start, end]."""

        raise NotImplementedError

    def list_exceptions(self, *, owner_id: int, start: date, end: date) -> Sequence[RuleException]:
        """Exceptions dated within [start, end], ascending by date."""

        raise NotImplementedError

    def create_rule(self, rule: NewRecurrenceRule) -> int:
        raise NotImplementedError

    def create_rules(self, rules: Sequence[NewRecurrenceRule]) -> Sequence[int]:
        """Persist all rules in one transaction. Returns rule ids in input order."""

        raise NotImplementedError

    def create_exception(self, exception: NewRuleException) -> int:
        raise NotImplementedError
