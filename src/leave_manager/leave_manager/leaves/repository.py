from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRecord


class LeaveRepository(Protocol):
    """Storage contract for leave requests.

    The service depends on this interface, never on a concrete database.
    Implementations raise StorageError when a read or write cannot complete.
    """

    def insert(self, record: LeaveRecord) -> int:
        """Persist a record without id as PENDING and return the new id."""

        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRecord]:
        raise NotImplementedError

    def list_by_employee(self, employee_id: str) -> Sequence[LeaveRecord]:
        """Return the employee's records ordered by start date."""

        raise NotImplementedError

    def list_approved_by_employee(self, employee_id: str) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def list_by_status(self, status: LeaveStatus, *, limit: int = 500) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def list_all(self, *, limit: int = 500) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def update(self, record: LeaveRecord) -> bool:
        """Overwrite dates, reason, status and comments of an existing record."""

        raise NotImplementedError

    def update_decision(
        self,
        leave_id: int,
        *,
        status: LeaveStatus,
        manager_comments: Optional[str],
    ) -> bool:
        """Apply a decision only if the record is still PENDING."""

        raise NotImplementedError

    def delete(self, leave_id: int) -> bool:
        raise NotImplementedError
