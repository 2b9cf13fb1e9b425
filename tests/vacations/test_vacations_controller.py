from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from conftest import InMemoryEmployees, InMemorySchedules, make_employee
from src.vacation_system.vacation_system.core.exceptions import StoreUnavailableError
from src.vacation_system.vacation_system.vacations.controller import register
from src.vacation_system.vacation_system.vacations.service import VacationService

TODAY = "2026-11-15"


def _make_client(schedules: InMemorySchedules):
    employees = InMemoryEmployees([make_employee("7", admission_date="10/03/2018")])
    container = SimpleNamespace(vacation_service=VacationService(employees, schedules))
    app = Flask(__name__)
    register(app, container)
    return app.test_client()


@pytest.fixture
def store() -> InMemorySchedules:
    return InMemorySchedules()


@pytest.fixture
def client(store):
    return _make_client(store)


def test_list_cycles(client):
    resp = client.get(f"/vacations/cycles?today={TODAY}")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["skipped"] == []
    [cycle] = body["cycles"]
    assert cycle["cycle_id"] == "7-2025"
    assert cycle["status"] == "ACQUIRED"
    assert cycle["remaining_days"] == 30
    assert cycle["acquisition_start"] == "10/03/2025"


def test_invalid_status_filter_is_bad_request(client):
    resp = client.get(f"/vacations/cycles?today={TODAY}&status=whatever")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid"


def test_summary(client):
    resp = client.get(f"/vacations/summary?today={TODAY}")

    assert resp.status_code == 200
    assert resp.get_json() == {"total": 1, "overdue": 0, "with_balance": 1, "in_progress": 0, "scheduled": 0}


def test_proposal_does_not_write(client, store):
    resp = client.post(
        f"/vacations/cycles/7-2025/proposal?today={TODAY}",
        json={"start": "2026-12-01", "end": "2026-12-15"},
    )

    assert resp.status_code == 200
    assert resp.get_json() == {"days": 15, "overlaps": False, "exceeds_balance": False}
    assert store.writes == 0


def test_schedule_then_conflicting_schedule(client):
    created = client.post(
        f"/vacations/cycles/7-2025/leaves?today={TODAY}",
        json={"start": "01/12/2026", "end": "15/12/2026"},
    )
    conflict = client.post(
        f"/vacations/cycles/7-2025/leaves?today={TODAY}",
        json={"start": "2026-12-10", "end": "2027-01-10"},
    )

    assert created.status_code == 201
    assert created.get_json()["days"] == 15
    assert conflict.status_code == 409
    assert conflict.get_json() == {"error": "rejected", "reasons": ["OVERLAP", "BALANCE_EXCEEDED"]}


def test_reschedule_and_remove(client):
    leave_id = client.post(
        f"/vacations/cycles/7-2025/leaves?today={TODAY}",
        json={"start": "2026-12-01", "end": "2026-12-15"},
    ).get_json()["id"]

    moved = client.put(
        f"/vacations/cycles/7-2025/leaves/{leave_id}?today={TODAY}",
        json={"start": "2026-12-02", "end": "2026-12-31"},
    )
    removed = client.delete(f"/vacations/cycles/7-2025/leaves/{leave_id}")
    missing = client.delete(f"/vacations/cycles/7-2025/leaves/{leave_id}")

    assert moved.status_code == 200
    assert moved.get_json()["days"] == 30
    assert removed.status_code == 200
    assert removed.get_json()["removed"]["id"] == leave_id
    assert missing.status_code == 404


def test_clear_cycle(client, store):
    client.post(
        f"/vacations/cycles/7-2025/leaves?today={TODAY}",
        json={"start": "2026-12-01", "end": "2026-12-15"},
    )

    resp = client.delete("/vacations/cycles/7-2025")

    assert resp.status_code == 200
    assert resp.get_json() == {"cleared": "7-2025"}
    assert store.payloads == {}


def test_unknown_cycle_is_not_found(client):
    resp = client.post(
        f"/vacations/cycles/7-2031/leaves?today={TODAY}",
        json={"start": "2026-12-01", "end": "2026-12-15"},
    )

    assert resp.status_code == 404


def test_bad_body_and_bad_dates_are_bad_request(client):
    no_body = client.post(f"/vacations/cycles/7-2025/leaves?today={TODAY}", data="nope")
    bad_date = client.post(
        f"/vacations/cycles/7-2025/leaves?today={TODAY}",
        json={"start": "31/02/2026", "end": "2026-12-15"},
    )

    assert no_body.status_code == 400
    assert bad_date.status_code == 400


def test_store_outage_is_service_unavailable():
    class DownSchedules(InMemorySchedules):
        def list_for_employee(self, employee_id):
            raise StoreUnavailableError("connection refused")

    resp = _make_client(DownSchedules()).get(f"/vacations/cycles?today={TODAY}")

    assert resp.status_code == 503
    assert resp.get_json()["error"] == "unavailable"


def test_proposal_excludes_numeric_leave_id_being_edited():
    store = InMemorySchedules({"7-2025": [{"id": "123", "start": "2026-12-01", "end": "2026-12-30", "days": 30}]})

    resp = _make_client(store).post(
        f"/vacations/cycles/7-2025/proposal?today={TODAY}",
        json={"start": "2026-12-01", "end": "2026-12-30", "leave_id": 123},
    )

    assert resp.status_code == 200
    assert resp.get_json() == {"days": 30, "overlaps": False, "exceeds_balance": False}
