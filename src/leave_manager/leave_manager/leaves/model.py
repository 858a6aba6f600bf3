from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, RejectionReason


@dataclass(frozen=True)
class LeaveRecord:
    employee_id: str
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus = LeaveStatus.PENDING
    manager_comments: Optional[str] = None
    leave_id: Optional[int] = None
    created_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None

    @property
    def duration_in_days(self) -> int:
        """Inclusive day count; 0 for a reversed range."""
        if self.end_date < self.start_date:
            return 0
        return (self.end_date - self.start_date).days + 1

    def overlaps(self, other: "LeaveRecord") -> bool:
        return self.start_date <= other.end_date and self.end_date >= other.start_date

    def with_decision(self, status: LeaveStatus, comments: Optional[str], decided_at: datetime) -> "LeaveRecord":
        return replace(self, status=status, manager_comments=comments, decided_at=decided_at)

    def to_dict(self) -> dict:
        return {
            "leave_id": self.leave_id,
            "employee_id": self.employee_id,
            "start_date": self.start_date.strftime("%Y-%m-%d"),
            "end_date": self.end_date.strftime("%Y-%m-%d"),
            "duration_in_days": self.duration_in_days,
            "reason": self.reason,
            "status": self.status.value,
            "manager_comments": self.manager_comments or "",
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M") if self.created_at else None,
            "decided_at": self.decided_at.strftime("%Y-%m-%d %H:%M") if self.decided_at else None,
        }


@dataclass(frozen=True)
class LeaveBalance:
    employee_id: str
    allowance: int
    used: int
    available: int

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "allowance": self.allowance,
            "used": self.used,
            "available": self.available,
        }


@dataclass(frozen=True)
class LeaveOutcome:
    """Result of a lifecycle operation.

    Truthy exactly when the operation succeeded, so it can stand in for the
    plain boolean contract; `reason` tells callers why it did not.
    """

    ok: bool
    leave_id: Optional[int] = None
    reason: Optional[RejectionReason] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, leave_id: Optional[int], message: str = "") -> "LeaveOutcome":
        return cls(ok=True, leave_id=leave_id, message=message)

    @classmethod
    def failure(cls, reason: RejectionReason, message: str, leave_id: Optional[int] = None) -> "LeaveOutcome":
        return cls(ok=False, leave_id=leave_id, reason=reason, message=message)
