from __future__ import annotations

from enum import Enum


class LeaveStatus(str, Enum):
    """Approval state of a leave request. APPROVED and REJECTED are terminal."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING


class RejectionReason(str, Enum):
    """Why the lifecycle service refused an operation."""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_RANGE = "INVALID_RANGE"
    OVERLAPPING_DATES = "OVERLAPPING_DATES"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    NOT_FOUND = "NOT_FOUND"
    ILLEGAL_TRANSITION = "ILLEGAL_TRANSITION"
    MISSING_REJECTION_REASON = "MISSING_REJECTION_REASON"
