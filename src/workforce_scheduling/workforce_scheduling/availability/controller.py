from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import format_local_time, parse_iso_date
from ..common.http import error_response, json_body, rate_limited
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    limit = rate_limited(container.rate_limiter)

    @app.route("/api/employees/<int:owner_id>/availability", methods=["PUT"], endpoint="availability_define")
    @limit
    def availability_define(owner_id: int):
        try:
            data = json_body()
            availability_id = container.availability_service.define(
                owner_id=owner_id,
                windows=data.get("windows") or [],
                effective_from=parse_iso_date(data["effective_from"]) if data.get("effective_from") else None,
                effective_to=parse_iso_date(data["effective_to"]) if data.get("effective_to") else None,
            )
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "availability_id": availability_id})

    @app.route(
        "/api/employees/<int:owner_id>/availability/overrides",
        methods=["POST"],
        endpoint="availability_overrides_create",
    )
    @limit
    def availability_overrides_create(owner_id: int):
        try:
            data = json_body()
            override_id = container.availability_service.add_override(
                owner_id=owner_id,
                override_date=parse_iso_date(data.get("override_date") or ""),
                start_time=data.get("start_time"),
                end_time=data.get("end_time"),
                reason=data.get("reason") or "",
            )
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "override_id": override_id}), 201

    @app.route(
        "/api/employees/<int:owner_id>/availability/overrides",
        methods=["GET"],
        endpoint="availability_overrides_list",
    )
    @limit
    def availability_overrides_list(owner_id: int):
        overrides = container.availability_service.upcoming_overrides(owner_id)
        return jsonify(
            {
                "success": True,
                "overrides": [
                    {
                        "override_date": o.override_date.strftime("%Y-%m-%d"),
                        "start_time": format_local_time(o.start_time),
                        "end_time": format_local_time(o.end_time),
                        "reason": o.reason,
                    }
                    for o in overrides
                ],
            }
        )
