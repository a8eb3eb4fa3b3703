from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_datetime
from ..common.http import error_response, json_body, rate_limited
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from .model import NewShift


def _minutes(data: dict, key: str) -> int:
    try:
        return int(data.get(key) or 0)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be a number")


def _new_shift(owner_id: int, data: dict) -> NewShift:
    return NewShift(
        owner_id=owner_id,
        start_at=parse_iso_datetime(data.get("start_at") or ""),
        end_at=parse_iso_datetime(data.get("end_at") or ""),
        paid_break_minutes=_minutes(data, "paid_break_minutes"),
        unpaid_break_minutes=_minutes(data, "unpaid_break_minutes"),
        note=(data.get("note") or "").strip() or None,
    )


def register(app: Flask, container: Container) -> None:
    limit = rate_limited(container.rate_limiter)

    @app.route("/api/employees/<int:owner_id>/shifts/check", methods=["POST"], endpoint="shifts_check")
    @limit
    def shifts_check(owner_id: int):
        try:
            data = json_body()
            start = parse_iso_datetime(data.get("start_at") or "")
            end = parse_iso_datetime(data.get("end_at") or "")
            verdict = container.shift_service.check(owner_id, start, end)
        except DomainError as e:
            return error_response(e)

        blocking = verdict.first_blocking
        return jsonify(
            {
                "success": True,
                "allowed": verdict.allowed,
                "blocked": not verdict.allowed,
                "reason": blocking.reason if blocking else None,
                "conflicting_shift_id": verdict.conflict.shift_id if verdict.conflict else None,
                "constraints": [
                    {
                        "allowed": r.allowed,
                        "blocked": r.blocked,
                        "reason": r.reason,
                        "requires_override": r.requires_override,
                    }
                    for r in verdict.constraints
                ],
            }
        )

    @app.route("/api/employees/<int:owner_id>/shifts", methods=["POST"], endpoint="shifts_create")
    @limit
    def shifts_create(owner_id: int):
        try:
            shift_id = container.shift_service.create(_new_shift(owner_id, json_body()))
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "shift_id": shift_id}), 201

    @app.route("/api/employees/<int:owner_id>/shifts/<int:shift_id>", methods=["PUT"], endpoint="shifts_update")
    @limit
    def shifts_update(owner_id: int, shift_id: int):
        try:
            container.shift_service.update(shift_id, _new_shift(owner_id, json_body()))
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "shift_id": shift_id})
