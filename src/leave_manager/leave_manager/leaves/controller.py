from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.validators import optional_text, require_non_empty
from ..core.enums import LeaveStatus, RejectionReason
from ..core.exceptions import StorageError, ValidationError
from ..container import Container
from .model import LeaveOutcome, LeaveRecord

logger = logging.getLogger(__name__)

_STATUS_BY_REASON = {
    RejectionReason.INVALID_INPUT: 400,
    RejectionReason.INVALID_RANGE: 400,
    RejectionReason.MISSING_REJECTION_REASON: 400,
    RejectionReason.NOT_FOUND: 404,
    RejectionReason.OVERLAPPING_DATES: 409,
    RejectionReason.INSUFFICIENT_BALANCE: 409,
    RejectionReason.ILLEGAL_TRANSITION: 409,
}


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    def _payload() -> dict:
        # Accept JSON bodies as well as plain form posts.
        data = request.get_json(silent=True)
        if isinstance(data, dict):
            return data
        return request.form.to_dict()

    def _outcome_response(outcome: LeaveOutcome, *, success_status: int = 200):
        body = {
            "ok": outcome.ok,
            "leave_id": outcome.leave_id,
            "message": outcome.message,
        }
        if outcome.ok:
            return jsonify(body), success_status
        body["error"] = outcome.reason.value
        return jsonify(body), _STATUS_BY_REASON.get(outcome.reason, 400)

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return jsonify({"ok": False, "error": RejectionReason.INVALID_INPUT.value, "message": str(e)}), 400

    @app.errorhandler(StorageError)
    def handle_storage_error(e: StorageError):
        logger.error("Storage failure: %s", e)
        return jsonify({"ok": False, "error": "STORAGE_FAILURE", "message": "Storage unavailable, nothing was changed"}), 503

    @app.route("/leaves", methods=["GET"], endpoint="list_leaves")
    def list_leaves():
        employee_id = (request.args.get("employee_id") or "").strip()
        status_arg = (request.args.get("status") or "").strip().upper()

        if status_arg:
            try:
                status = LeaveStatus(status_arg)
            except ValueError:
                raise ValidationError(f"Unknown status: {status_arg}")
        else:
            status = None

        if employee_id:
            items = service.list_for_employee(employee_id)
            if status is not None:
                items = [r for r in items if r.status == status]
        elif status is not None:
            items = service.list_by_status(status)
        else:
            items = service.list_all()
        return jsonify({"leaves": [r.to_dict() for r in items]})

    @app.route("/leaves", methods=["POST"], endpoint="submit_leave")
    def submit_leave():
        data = _payload()
        start_date = parse_optional_date(data.get("start_date"), "Start date")
        end_date = parse_optional_date(data.get("end_date"), "End date")
        if start_date is None or end_date is None:
            raise ValidationError("Start date and end date are required")

        record = LeaveRecord(
            employee_id=require_non_empty(data.get("employee_id"), "Employee"),
            start_date=start_date,
            end_date=end_date,
            reason=optional_text(data.get("reason"), "Reason") or "",
        )
        return _outcome_response(service.submit(record), success_status=201)

    @app.route("/leaves/<int:leave_id>", methods=["GET"], endpoint="get_leave")
    def get_leave(leave_id: int):
        record = service.get(leave_id)
        if not record:
            return _outcome_response(
                LeaveOutcome.failure(RejectionReason.NOT_FOUND, "Leave request not found", leave_id)
            )
        return jsonify(record.to_dict())

    @app.route("/leaves/<int:leave_id>", methods=["PUT"], endpoint="update_leave")
    def update_leave(leave_id: int):
        data = _payload()
        outcome = service.update(
            leave_id,
            start_date=parse_optional_date(data.get("start_date"), "Start date"),
            end_date=parse_optional_date(data.get("end_date"), "End date"),
            reason=optional_text(data.get("reason"), "Reason"),
        )
        return _outcome_response(outcome)

    @app.route("/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="approve_leave")
    def approve_leave(leave_id: int):
        return _outcome_response(service.approve(leave_id, optional_text(_payload().get("comments"), "Comments")))

    @app.route("/leaves/<int:leave_id>/reject", methods=["POST"], endpoint="reject_leave")
    def reject_leave(leave_id: int):
        return _outcome_response(service.reject(leave_id, optional_text(_payload().get("comments"), "Comments")))

    @app.route("/leaves/<int:leave_id>", methods=["DELETE"], endpoint="delete_leave")
    def delete_leave(leave_id: int):
        return _outcome_response(service.delete(leave_id))

    @app.route("/employees/<employee_id>/leave-balance", methods=["GET"], endpoint="leave_balance")
    def leave_balance(employee_id: str):
        return jsonify(service.balance(employee_id).to_dict())
