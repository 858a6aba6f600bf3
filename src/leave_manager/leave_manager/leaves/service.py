from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.validators import clean_optional, is_blank
from ..core.constants import AUDIT_LOGGER_NAME, DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStatus, RejectionReason
from .balance import BalanceCalculator
from .conflicts import ConflictChecker
from .locks import EmployeeLocks
from .model import LeaveBalance, LeaveOutcome, LeaveRecord
from .repository import LeaveRepository

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)


class LeaveLifecycleService:
    """Use case: submit, decide, edit and delete leave requests.

    Refusals are returned as LeaveOutcome values carrying a RejectionReason.
    Only StorageError raised by the repository propagates to callers, and it
    means no state change happened.
    """

    def __init__(
        self,
        leaves: LeaveRepository,
        balance: BalanceCalculator | None = None,
        *,
        conflicts: ConflictChecker | None = None,
        locks: EmployeeLocks | None = None,
        check_balance_on_approve: bool = False,
    ):
        self._leaves = leaves
        self._balance = balance or BalanceCalculator(leaves)
        self._conflicts = conflicts or ConflictChecker()
        self._locks = locks or EmployeeLocks()
        self._check_balance_on_approve = bool(check_balance_on_approve)

    # -------- Validation --------
    def _validate(self, record: LeaveRecord) -> Optional[LeaveOutcome]:
        """Run the submission checks in order; return the first failure or None."""
        if is_blank(record.employee_id) or record.start_date is None or record.end_date is None:
            return LeaveOutcome.failure(
                RejectionReason.INVALID_INPUT,
                "Employee, start date and end date are required",
                record.leave_id,
            )
        if is_blank(record.reason):
            return LeaveOutcome.failure(RejectionReason.INVALID_INPUT, "Reason is required", record.leave_id)

        if record.end_date < record.start_date:
            return LeaveOutcome.failure(
                RejectionReason.INVALID_RANGE,
                "End date must be on or after start date",
                record.leave_id,
            )

        clash = self._conflicts.find_conflict(record, self._leaves.list_by_employee(record.employee_id))
        if clash:
            return LeaveOutcome.failure(
                RejectionReason.OVERLAPPING_DATES,
                f"Overlaps leave #{clash.leave_id} ({clash.start_date:%Y-%m-%d} to {clash.end_date:%Y-%m-%d})",
                record.leave_id,
            )

        available = self._balance.available_days(record.employee_id)
        if available < record.duration_in_days:
            return LeaveOutcome.failure(
                RejectionReason.INSUFFICIENT_BALANCE,
                f"Requested {record.duration_in_days} day(s) but only {available} available",
                record.leave_id,
            )
        return None

    # -------- Commands --------
    def submit(self, record: LeaveRecord) -> LeaveOutcome:
        employee_id = str(record.employee_id or "").strip()
        candidate = replace(
            record,
            employee_id=employee_id,
            reason=str(record.reason or "").strip(),
            leave_id=None,
            status=LeaveStatus.PENDING,
            manager_comments=None,
            decided_at=None,
        )

        with self._locks.hold(employee_id):
            failure = self._validate(candidate)
            if failure is not None:
                logger.info("Leave submission refused for %s: %s", employee_id, failure.reason.value)
                return failure
            leave_id = self._leaves.insert(candidate)

        logger.info(
            "Leave #%s submitted for %s (%s to %s, %d day(s))",
            leave_id,
            employee_id,
            candidate.start_date,
            candidate.end_date,
            candidate.duration_in_days,
        )
        return LeaveOutcome.success(leave_id, "Leave request submitted")

    def _decide(self, leave_id: int, status: LeaveStatus, comments: Optional[str]) -> LeaveOutcome:
        current = self._leaves.get_by_id(int(leave_id))
        if not current:
            return LeaveOutcome.failure(RejectionReason.NOT_FOUND, "Leave request not found", leave_id)

        with self._locks.hold(current.employee_id):
            current = self._leaves.get_by_id(int(leave_id))
            if not current:
                return LeaveOutcome.failure(RejectionReason.NOT_FOUND, "Leave request not found", leave_id)
            if current.status != LeaveStatus.PENDING:
                return LeaveOutcome.failure(
                    RejectionReason.ILLEGAL_TRANSITION,
                    f"Leave request is already {current.status.value}",
                    leave_id,
                )

            if status == LeaveStatus.APPROVED and self._check_balance_on_approve:
                available = self._balance.available_days(current.employee_id)
                if available < current.duration_in_days:
                    return LeaveOutcome.failure(
                        RejectionReason.INSUFFICIENT_BALANCE,
                        f"Approving needs {current.duration_in_days} day(s) but only {available} available",
                        leave_id,
                    )

            if not self._leaves.update_decision(int(leave_id), status=status, manager_comments=comments):
                # Someone else decided it between our read and the guarded update.
                return LeaveOutcome.failure(
                    RejectionReason.ILLEGAL_TRANSITION,
                    "Leave request is no longer pending",
                    leave_id,
                )

        logger.info("Leave #%s %s for %s", leave_id, status.value.lower(), current.employee_id)
        return LeaveOutcome.success(int(leave_id), f"Leave request {status.value.lower()}")

    def approve(self, leave_id: int, comments: Optional[str] = "") -> LeaveOutcome:
        return self._decide(leave_id, LeaveStatus.APPROVED, clean_optional(comments))

    def reject(self, leave_id: int, comments: Optional[str]) -> LeaveOutcome:
        # Checked before existence so a blank rejection fails the same way for any id.
        if is_blank(comments):
            return LeaveOutcome.failure(
                RejectionReason.MISSING_REJECTION_REASON,
                "A comment is required to reject a leave request",
                leave_id,
            )
        return self._decide(leave_id, LeaveStatus.REJECTED, clean_optional(comments))

    def update(
        self,
        leave_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        reason: Optional[str] = None,
    ) -> LeaveOutcome:
        """Administrative edit of a pending request's dates or reason."""
        current = self._leaves.get_by_id(int(leave_id))
        if not current:
            return LeaveOutcome.failure(RejectionReason.NOT_FOUND, "Leave request not found", leave_id)

        with self._locks.hold(current.employee_id):
            current = self._leaves.get_by_id(int(leave_id))
            if not current:
                return LeaveOutcome.failure(RejectionReason.NOT_FOUND, "Leave request not found", leave_id)
            if current.status != LeaveStatus.PENDING:
                return LeaveOutcome.failure(
                    RejectionReason.ILLEGAL_TRANSITION,
                    f"Only pending requests can be edited (this one is {current.status.value})",
                    leave_id,
                )

            edited = replace(
                current,
                start_date=start_date or current.start_date,
                end_date=end_date or current.end_date,
                reason=current.reason if reason is None else str(reason).strip(),
            )
            failure = self._validate(edited)
            if failure is not None:
                logger.info("Leave #%s edit refused: %s", leave_id, failure.reason.value)
                return failure
            if not self._leaves.update(edited):
                return LeaveOutcome.failure(RejectionReason.NOT_FOUND, "Leave request not found", leave_id)

        logger.info("Leave #%s edited (%s to %s)", leave_id, edited.start_date, edited.end_date)
        return LeaveOutcome.success(int(leave_id), "Leave request updated")

    def delete(self, leave_id: int) -> LeaveOutcome:
        """Delete regardless of status; decided records leave an audit trail."""
        current = self._leaves.get_by_id(int(leave_id))
        if not current:
            return LeaveOutcome.failure(RejectionReason.NOT_FOUND, "Leave request not found", leave_id)

        with self._locks.hold(current.employee_id):
            current = self._leaves.get_by_id(int(leave_id))
            if not current or not self._leaves.delete(int(leave_id)):
                return LeaveOutcome.failure(RejectionReason.NOT_FOUND, "Leave request not found", leave_id)

        if current.status.is_terminal:
            audit_logger.warning(
                "Deleted %s leave #%s of %s (%s to %s, %d day(s)); comments=%r",
                current.status.value,
                current.leave_id,
                current.employee_id,
                current.start_date,
                current.end_date,
                current.duration_in_days,
                current.manager_comments,
            )
        else:
            logger.info("Leave #%s deleted", leave_id)
        return LeaveOutcome.success(int(leave_id), "Leave request deleted")

    # -------- Queries --------
    def get(self, leave_id: int) -> Optional[LeaveRecord]:
        return self._leaves.get_by_id(int(leave_id))

    def list_for_employee(self, employee_id: str) -> Sequence[LeaveRecord]:
        return self._leaves.list_by_employee(employee_id)

    def list_pending(self, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveRecord]:
        return self._leaves.list_by_status(LeaveStatus.PENDING, limit=limit)

    def list_by_status(self, status: LeaveStatus, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveRecord]:
        return self._leaves.list_by_status(status, limit=limit)

    def list_all(self, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveRecord]:
        return self._leaves.list_all(limit=limit)

    def approved_days_used(self, employee_id: str) -> int:
        return self._balance.approved_days_used(employee_id)

    def available_days(self, employee_id: str) -> int:
        return self._balance.available_days(employee_id)

    def balance(self, employee_id: str) -> LeaveBalance:
        return self._balance.balance(employee_id)
