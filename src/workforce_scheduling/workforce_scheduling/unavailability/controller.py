from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, Mapping

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.http import error_response, json_body, rate_limited
from ..common.validators import require_bool
from ..container import Container
from ..core.constants import DEFAULT_RESOLVE_DAYS
from ..core.enums import RuleStatus
from ..core.exceptions import DomainError, ValidationError
from ..windows.model import ResolvedDay


def resolved_day_to_dict(day: ResolvedDay) -> dict:
    return {
        "date": day.date.strftime("%Y-%m-%d"),
        "windows": [{"start": w.start.isoformat(), "end": w.end.isoformat()} for w in day.windows],
    }


def _rule_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    try:
        status = RuleStatus(data.get("status") or RuleStatus.ACTIVE.value)
    except ValueError:
        raise ValidationError(f"Unknown rule status {data.get('status')!r}")

    return dict(
        weekdays=data.get("byweekday") or [],
        all_day=require_bool(data.get("all_day"), "all_day"),
        start_time=data.get("start_time_local"),
        end_time=data.get("end_time_local"),
        timezone=data.get("timezone") or "",
        effective_from=parse_iso_date(data["effective_from"]) if data.get("effective_from") else None,
        effective_to=parse_iso_date(data["effective_to"]) if data.get("effective_to") else None,
        status=status,
        note=data.get("note"),
    )


def register(app: Flask, container: Container) -> None:
    limit = rate_limited(container.rate_limiter)

    @app.route(
        "/api/employees/<int:owner_id>/unavailability/resolved",
        methods=["GET"],
        endpoint="unavailability_resolved",
    )
    @limit
    def unavailability_resolved(owner_id: int):
        try:
            today = today_local()
            start = parse_iso_date(request.args["from"]) if request.args.get("from") else today
            end = (
                parse_iso_date(request.args["to"])
                if request.args.get("to")
                else start + timedelta(days=DEFAULT_RESOLVE_DAYS - 1)
            )
            days = container.resolver.resolve(owner_id, start, end)
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "days": [resolved_day_to_dict(d) for d in days]})

    @app.route(
        "/api/employees/<int:owner_id>/unavailability/rules",
        methods=["POST"],
        endpoint="unavailability_rules_create",
    )
    @limit
    def unavailability_rules_create(owner_id: int):
        try:
            rule_id = container.unavailability_service.add_rule(owner_id=owner_id, **_rule_fields(json_body()))
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "rule_id": rule_id}), 201

    @app.route(
        "/api/employees/<int:owner_id>/unavailability/rules/bulk",
        methods=["POST"],
        endpoint="unavailability_rules_bulk_create",
    )
    @limit
    def unavailability_rules_bulk_create(owner_id: int):
        try:
            rules = json_body().get("rules")
            if not isinstance(rules, list) or not all(isinstance(r, dict) for r in rules):
                raise ValidationError("rules must be a list of rule objects")
            rule_ids = container.unavailability_service.add_rules(
                owner_id=owner_id, rules=[_rule_fields(r) for r in rules]
            )
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "rule_ids": rule_ids}), 201

    @app.route(
        "/api/employees/<int:owner_id>/unavailability/exceptions",
        methods=["POST"],
        endpoint="unavailability_exceptions_create",
    )
    @limit
    def unavailability_exceptions_create(owner_id: int):
        try:
            data = json_body()
            exception_id = container.unavailability_service.add_exception(
                owner_id=owner_id,
                day=parse_iso_date(data.get("date_local") or ""),
                kind=data.get("type") or "",
                all_day=require_bool(data.get("all_day"), "all_day"),
                start_time=data.get("start_time_local"),
                end_time=data.get("end_time_local"),
                timezone=data.get("timezone") or "",
                note=data.get("note"),
            )
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "exception_id": exception_id}), 201
