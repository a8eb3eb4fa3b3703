from __future__ import annotations

from datetime import datetime

import pytest

from src.workforce_scheduling.workforce_scheduling.availability.model import Availability
from src.workforce_scheduling.workforce_scheduling.container import wire
from src.workforce_scheduling.workforce_scheduling.main import create_app
from src.workforce_scheduling.workforce_scheduling.ratelimit.limiter import FixedWindowRateLimiter
from src.workforce_scheduling.workforce_scheduling.shifts.model import Shift
from src.workforce_scheduling.workforce_scheduling.unavailability.model import RecurrenceRule, RuleException


class MemoryUnavailability:
    def __init__(self):
        self.rules = []
        self.exceptions = []

    def list_rules(self, *, owner_id, start, end):
        return [r for r in self.rules if r.owner_id == owner_id and r.intersects(start, end)]

    def list_exceptions(self, *, owner_id, start, end):
        return [e for e in self.exceptions if e.owner_id == owner_id and start <= e.date <= end]

    def create_rule(self, rule):
        rule_id = len(self.rules) + 1
        self.rules.append(RecurrenceRule(rule_id=rule_id, **vars(rule)))
        return rule_id

    def create_rules(self, rules):
        return [self.create_rule(r) for r in rules]

    def create_exception(self, exception):
        exception_id = len(self.exceptions) + 1
        self.exceptions.append(RuleException(exception_id=exception_id, **vars(exception)))
        return exception_id


class MemoryAvailability:
    def __init__(self):
        self.by_owner = {}

    def get_for_owner(self, owner_id):
        return self.by_owner.get(owner_id)

    def upsert(self, *, owner_id, windows, effective_from, effective_to):
        self.by_owner[owner_id] = Availability(
            availability_id=owner_id,
            owner_id=owner_id,
            windows=tuple(windows),
            effective_from=effective_from,
            effective_to=effective_to,
        )
        return owner_id

    def create_override(self, *, availability_id, override):
        current = self.by_owner[availability_id]
        self.by_owner[availability_id] = Availability(
            availability_id=current.availability_id,
            owner_id=current.owner_id,
            windows=current.windows,
            effective_from=current.effective_from,
            effective_to=current.effective_to,
            overrides=current.overrides + (override,),
        )
        return len(current.overrides) + 1


class MemoryShifts:
    def __init__(self):
        self.shifts = {}

    def list_for_owner(self, owner_id):
        return [s for s in self.shifts.values() if s.owner_id == owner_id]

    def get_by_id(self, shift_id):
        return self.shifts.get(shift_id)

    def create(self, shift):
        shift_id = len(self.shifts) + 1
        self.shifts[shift_id] = Shift(shift_id=shift_id, **vars(shift))
        return shift_id

    def update(self, shift_id, shift):
        self.shifts[shift_id] = Shift(shift_id=shift_id, **vars(shift))
        return True


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire(
        unavailability_repo=MemoryUnavailability(),
        availability_repo=MemoryAvailability(),
        shifts_repo=MemoryShifts(),
        rate_limiter=FixedWindowRateLimiter(max_requests=1000, window_seconds=60),
    )
    app = create_app(container)
    return app.test_client()


def test_create_rule_then_resolve(client):
    created = client.post(
        "/api/employees/7/unavailability/rules",
        json={
            "byweekday": [1],
            "all_day": False,
            "start_time_local": "22:00",
            "end_time_local": "06:00",
            "timezone": "Asia/Ho_Chi_Minh",
        },
    )
    assert created.status_code == 201

    resp = client.get("/api/employees/7/unavailability/resolved?from=2026-03-02&to=2026-03-03")

    assert resp.status_code == 200
    assert resp.get_json()["days"] == [
        {
            "date": "2026-03-02",
            "windows": [
                {"start": "2026-03-02T22:00:00", "end": "2026-03-02T23:59:59.999000"},
                {"start": "2026-03-03T00:00:00", "end": "2026-03-03T06:00:00"},
            ],
        }
    ]


def test_inverted_range_is_a_bad_request(client):
    resp = client.get("/api/employees/7/unavailability/resolved?from=2026-03-05&to=2026-03-02")

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_invalid_rule_is_rejected(client):
    resp = client.post("/api/employees/7/unavailability/rules", json={"byweekday": [], "timezone": "UTC"})

    assert resp.status_code == 400


def test_exception_removes_part_of_the_day(client):
    client.post(
        "/api/employees/7/unavailability/rules",
        json={"byweekday": [1], "start_time_local": "09:00", "end_time_local": "17:00", "timezone": "UTC"},
    )
    created = client.post(
        "/api/employees/7/unavailability/exceptions",
        json={
            "date_local": "2026-03-02",
            "type": "REMOVE",
            "start_time_local": "12:00",
            "end_time_local": "13:00",
            "timezone": "UTC",
        },
    )
    assert created.status_code == 201

    day = client.get("/api/employees/7/unavailability/resolved?from=2026-03-02&to=2026-03-02").get_json()["days"][0]

    assert [w["start"][11:16] for w in day["windows"]] == ["09:00", "13:00"]


def test_shift_blocked_by_unavailability_is_unprocessable(client):
    client.post("/api/employees/7/unavailability/rules", json={"byweekday": [1], "all_day": True, "timezone": "UTC"})

    check = client.post(
        "/api/employees/7/shifts/check",
        json={"start_at": "2026-03-02T09:00:00", "end_at": "2026-03-02T12:00:00"},
    )
    assert check.status_code == 200
    assert check.get_json()["blocked"] is True
    assert check.get_json()["reason"] == "Full-day unavailability"

    resp = client.post(
        "/api/employees/7/shifts",
        json={"start_at": "2026-03-02T09:00:00", "end_at": "2026-03-02T12:00:00"},
    )
    assert resp.status_code == 422


def test_overlapping_shift_is_a_conflict(client):
    first = client.post(
        "/api/employees/7/shifts",
        json={"start_at": "2026-03-02T09:00:00", "end_at": "2026-03-02T12:00:00"},
    )
    assert first.status_code == 201

    adjacent = client.post(
        "/api/employees/7/shifts",
        json={"start_at": "2026-03-02T12:00:00", "end_at": "2026-03-02T15:00:00"},
    )
    assert adjacent.status_code == 201

    clash = client.post(
        "/api/employees/7/shifts",
        json={"start_at": "2026-03-02T11:00:00", "end_at": "2026-03-02T13:00:00"},
    )
    assert clash.status_code == 409
    assert clash.get_json()["conflicting_shift"]["shift_id"] == first.get_json()["shift_id"]


def test_shift_outside_availability_requires_override(client):
    defined = client.put(
        "/api/employees/7/availability",
        json={"windows": [{"day_of_week": 1, "start_time": "08:00", "end_time": "09:30"}]},
    )
    assert defined.status_code == 200

    resp = client.post(
        "/api/employees/7/shifts",
        json={"start_at": "2026-03-02T09:00:00", "end_at": "2026-03-02T10:00:00"},
    )

    assert resp.status_code == 422
    assert resp.get_json()["requires_override"] is True


def test_shift_update_keeps_its_own_slot(client):
    created = client.post(
        "/api/employees/7/shifts",
        json={"start_at": "2026-03-02T09:00:00", "end_at": "2026-03-02T12:00:00"},
    ).get_json()

    resp = client.put(
        f"/api/employees/7/shifts/{created['shift_id']}",
        json={"start_at": "2026-03-02T10:00:00", "end_at": "2026-03-02T13:00:00"},
    )

    assert resp.status_code == 200


def test_override_for_past_date_is_rejected(client):
    client.put("/api/employees/7/availability", json={"windows": []})

    resp = client.post(
        "/api/employees/7/availability/overrides",
        json={"override_date": "2000-01-01", "reason": "Trip"},
    )

    assert resp.status_code == 400


def test_non_json_body_is_rejected(client):
    resp = client.post("/api/employees/7/shifts", data="nope", content_type="text/plain")

    assert resp.status_code == 400


def test_rate_limit_returns_429(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire(
        unavailability_repo=MemoryUnavailability(),
        availability_repo=MemoryAvailability(),
        shifts_repo=MemoryShifts(),
        rate_limiter=FixedWindowRateLimiter(max_requests=2, window_seconds=60, clock=lambda: 0.0),
    )
    client = create_app(container).test_client()
    url = "/api/employees/7/unavailability/resolved?from=2026-03-02&to=2026-03-02"

    assert client.get(url).status_code == 200
    assert client.get(url).status_code == 200
    resp = client.get(url)

    assert resp.status_code == 429
    assert resp.get_json()["retry_after"] == 60.0


def test_resolved_datetimes_are_naive_local_wall_clock(client):
    client.post("/api/employees/7/unavailability/rules", json={"byweekday": [1], "all_day": True, "timezone": "UTC"})

    day = client.get("/api/employees/7/unavailability/resolved?from=2026-03-02&to=2026-03-02").get_json()["days"][0]

    assert datetime.fromisoformat(day["windows"][0]["start"]).tzinfo is None


@pytest.mark.parametrize("byweekday", ["1,3", ["mon"], 5])
def test_malformed_weekdays_are_a_bad_request(client, byweekday):
    resp = client.post(
        "/api/employees/7/unavailability/rules",
        json={"byweekday": byweekday, "all_day": True, "timezone": "UTC"},
    )

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_all_day_must_be_a_json_boolean(client):
    rule = {"byweekday": [1], "start_time_local": "09:00", "end_time_local": "10:00", "timezone": "UTC"}

    rejected = client.post("/api/employees/7/unavailability/rules", json={**rule, "all_day": "false"})
    accepted = client.post("/api/employees/7/unavailability/rules", json={**rule, "all_day": False})

    assert rejected.status_code == 400
    assert accepted.status_code == 201
    day = client.get("/api/employees/7/unavailability/resolved?from=2026-03-02&to=2026-03-02").get_json()["days"][0]
    assert day["windows"] == [{"start": "2026-03-02T09:00:00", "end": "2026-03-02T10:00:00"}]


def test_bulk_rules_are_created_together(client):
    resp = client.post(
        "/api/employees/7/unavailability/rules/bulk",
        json={
            "rules": [
                {"byweekday": [1], "all_day": True, "timezone": "UTC"},
                {"byweekday": [2], "start_time_local": "18:00", "end_time_local": "20:00", "timezone": "UTC"},
            ]
        },
    )

    assert resp.status_code == 201
    assert resp.get_json()["rule_ids"] == [1, 2]
    days = client.get("/api/employees/7/unavailability/resolved?from=2026-03-02&to=2026-03-03").get_json()["days"]
    assert [d["date"] for d in days] == ["2026-03-02", "2026-03-03"]


def test_bulk_with_one_invalid_rule_stores_nothing(client):
    resp = client.post(
        "/api/employees/7/unavailability/rules/bulk",
        json={
            "rules": [
                {"byweekday": [1], "all_day": True, "timezone": "UTC"},
                {"byweekday": [1], "all_day": "yes", "timezone": "UTC"},
            ]
        },
    )

    assert resp.status_code == 400
    days = client.get("/api/employees/7/unavailability/resolved?from=2026-03-02&to=2026-03-02").get_json()["days"]
    assert days == []


def test_bulk_requires_a_list_of_rules(client):
    resp = client.post("/api/employees/7/unavailability/rules/bulk", json={"rules": {"byweekday": [1]}})

    assert resp.status_code == 400
