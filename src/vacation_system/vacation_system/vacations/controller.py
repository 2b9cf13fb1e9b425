from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_date
from ..core.enums import CycleSortKey, CycleStatus
from ..core.exceptions import (
    LeaveRejectedError,
    NotFoundError,
    StoreError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def register(app: Flask, container) -> None:
    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except LeaveRejectedError as e:
                return jsonify({"error": "rejected", "reasons": [r.value for r in e.reasons]}), 409
            except NotFoundError as e:
                return jsonify({"error": "not_found", "message": str(e)}), 404
            except ValidationError as e:
                return jsonify({"error": "invalid", "message": str(e)}), 400
            except StoreUnavailableError as e:
                logger.error("Schedule store unavailable: %s", e)
                return jsonify({"error": "unavailable", "message": "Schedule store unavailable, try again"}), 503
            except StoreError as e:
                logger.error("Schedule store error: %s", e)
                return jsonify({"error": "store", "message": str(e)}), 500

        return wrapper

    def _today() -> Optional[date]:
        value = request.args.get("today")
        return parse_date(value, "today") if value else None

    def _body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Expected a JSON object body")
        return data

    def _optional_str(value) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)

    def _enum_arg(enum_cls, name: str):
        value = request.args.get(name)
        if not value:
            return None
        try:
            return enum_cls(value)
        except ValueError:
            raise ValidationError(f"Invalid {name}: {value!r}")

    @app.route("/vacations/cycles", methods=["GET"], endpoint="vacation_cycles")
    @json_errors
    def vacation_cycles():
        listing = container.vacation_service.list_cycles(
            _today(),
            status=_enum_arg(CycleStatus, "status"),
            search=request.args.get("search") or None,
            sort_by=_enum_arg(CycleSortKey, "sort") or CycleSortKey.NAME,
            descending=request.args.get("order") == "desc",
        )
        return jsonify(
            {
                "cycles": [c.to_dict() for c in listing.cycles],
                "skipped": [{"employee_id": s.employee_id, "reason": s.reason} for s in listing.skipped],
            }
        )

    @app.route("/vacations/summary", methods=["GET"], endpoint="vacation_summary")
    @json_errors
    def vacation_summary():
        s = container.vacation_service.summary(_today())
        return jsonify(
            {
                "total": s.total,
                "overdue": s.overdue,
                "with_balance": s.with_balance,
                "in_progress": s.in_progress,
                "scheduled": s.scheduled,
            }
        )

    @app.route("/vacations/cycles/<cycle_id>/proposal", methods=["POST"], endpoint="vacation_propose_leave")
    @json_errors
    def vacation_propose_leave(cycle_id: str):
        data = _body()
        proposal = container.vacation_service.propose_leave(
            cycle_id=cycle_id,
            start=data.get("start") or "",
            end=data.get("end") or "",
            excluding_leave_id=_optional_str(data.get("leave_id")),
            today=_today(),
        )
        return jsonify(
            {
                "days": proposal.days,
                "overlaps": proposal.overlaps,
                "exceeds_balance": proposal.exceeds_balance,
            }
        )

    @app.route("/vacations/cycles/<cycle_id>/leaves", methods=["POST"], endpoint="vacation_schedule_leave")
    @json_errors
    def vacation_schedule_leave(cycle_id: str):
        data = _body()
        leave = container.vacation_service.schedule_leave(
            cycle_id=cycle_id,
            start=data.get("start") or "",
            end=data.get("end") or "",
            today=_today(),
        )
        return jsonify(leave.to_record()), 201

    @app.route(
        "/vacations/cycles/<cycle_id>/leaves/<leave_id>",
        methods=["PUT"],
        endpoint="vacation_reschedule_leave",
    )
    @json_errors
    def vacation_reschedule_leave(cycle_id: str, leave_id: str):
        data = _body()
        leave = container.vacation_service.reschedule_leave(
            cycle_id=cycle_id,
            leave_id=leave_id,
            start=data.get("start") or "",
            end=data.get("end") or "",
            today=_today(),
        )
        return jsonify(leave.to_record())

    @app.route(
        "/vacations/cycles/<cycle_id>/leaves/<leave_id>",
        methods=["DELETE"],
        endpoint="vacation_remove_leave",
    )
    @json_errors
    def vacation_remove_leave(cycle_id: str, leave_id: str):
        removed = container.vacation_service.remove_leave(cycle_id=cycle_id, leave_id=leave_id)
        return jsonify({"removed": removed.to_record()})

    @app.route("/vacations/cycles/<cycle_id>", methods=["DELETE"], endpoint="vacation_clear_cycle")
    @json_errors
    def vacation_clear_cycle(cycle_id: str):
        container.vacation_service.clear_cycle(cycle_id=cycle_id)
        return jsonify({"cleared": cycle_id})
