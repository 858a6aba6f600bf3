from __future__ import annotations

from typing import Iterable, Optional

from ..core.enums import LeaveStatus
from .model import LeaveRecord


class ConflictChecker:
    """Detect date overlaps between a candidate and an employee's existing requests.

    The caller scopes `existing` to one employee; no filtering by employee is
    done here. Rejected requests no longer occupy the calendar, and a persisted
    candidate never conflicts with itself.
    """

    def find_conflict(self, candidate: LeaveRecord, existing: Iterable[LeaveRecord]) -> Optional[LeaveRecord]:
        for other in existing:
            if other.status == LeaveStatus.REJECTED:
                continue
            if candidate.leave_id is not None and other.leave_id == candidate.leave_id:
                continue
            if candidate.overlaps(other):
                return other
        return None

    def has_conflict(self, candidate: LeaveRecord, existing: Iterable[LeaveRecord]) -> bool:
        return self.find_conflict(candidate, existing) is not None
