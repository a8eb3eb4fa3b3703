from __future__ import annotations

from functools import wraps
from typing import Any, Dict, Optional, Tuple

from flask import jsonify, request

from ..core.exceptions import (
    ConstraintViolationError,
    DomainError,
    RateLimitExceeded,
    ShiftConflictError,
    ValidationError,
)
from ..ratelimit.limiter import FixedWindowRateLimiter


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def error_response(exc: DomainError) -> Tuple[Any, int]:
    """Translate a domain error into a JSON response + HTTP status."""
    body: Dict[str, Any] = {"success": False, "message": str(exc)}
    status = 400

    if isinstance(exc, ShiftConflictError):
        status = 409
        body["conflicting_shift"] = {
            "shift_id": exc.conflicting.shift_id,
            "start_at": exc.conflicting.start_at.isoformat(),
            "end_at": exc.conflicting.end_at.isoformat(),
        }
    elif isinstance(exc, ConstraintViolationError):
        status = 422
        body["requires_override"] = exc.result.requires_override
    elif isinstance(exc, RateLimitExceeded):
        status = 429
        body["retry_after"] = round(exc.retry_after, 1)

    return jsonify(body), status


def rate_limited(limiter: FixedWindowRateLimiter, *, scope: Optional[str] = None):
    """Count each call against `limiter`, keyed by client address and route."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            client = request.remote_addr or "unknown"
            key = f"{client}:{request.method}:{scope or request.path}"
            try:
                limiter.hit(key)
            except RateLimitExceeded as e:
                return error_response(e)
            return view(*args, **kwargs)

        return wrapper

    return decorator
