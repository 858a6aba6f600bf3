from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import LeaveStatus
from .model import LeaveRecord
from .repository import LeaveRepository


class InMemoryLeaveRepository(LeaveRepository):
    """Process-local repository for development and tests (STORAGE_BACKEND=memory)."""

    def __init__(self):
        self._records: dict[int, LeaveRecord] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def insert(self, record: LeaveRecord) -> int:
        with self._lock:
            leave_id = self._next_id
            self._next_id += 1
            self._records[leave_id] = replace(
                record,
                leave_id=leave_id,
                status=LeaveStatus.PENDING,
                manager_comments=None,
                created_at=now_local(),
                decided_at=None,
            )
            return leave_id

    def get_by_id(self, leave_id: int) -> Optional[LeaveRecord]:
        with self._lock:
            return self._records.get(int(leave_id))

    def _select(self, predicate, limit: Optional[int] = None) -> Sequence[LeaveRecord]:
        with self._lock:
            items = [r for r in self._records.values() if predicate(r)]
        items.sort(key=lambda r: (r.start_date, r.leave_id))
        return items[:limit] if limit is not None else items

    def list_by_employee(self, employee_id: str) -> Sequence[LeaveRecord]:
        return self._select(lambda r: r.employee_id == employee_id)

    def list_approved_by_employee(self, employee_id: str) -> Sequence[LeaveRecord]:
        return self._select(lambda r: r.employee_id == employee_id and r.status == LeaveStatus.APPROVED)

    def list_by_status(self, status: LeaveStatus, *, limit: int = 500) -> Sequence[LeaveRecord]:
        return self._select(lambda r: r.status == status, limit)

    def list_all(self, *, limit: int = 500) -> Sequence[LeaveRecord]:
        return self._select(lambda r: True, limit)

    def update(self, record: LeaveRecord) -> bool:
        if record.leave_id is None:
            return False
        with self._lock:
            current = self._records.get(int(record.leave_id))
            if not current:
                return False
            self._records[current.leave_id] = replace(
                current,
                start_date=record.start_date,
                end_date=record.end_date,
                reason=record.reason,
                status=record.status,
                manager_comments=record.manager_comments,
            )
            return True

    def update_decision(
        self,
        leave_id: int,
        *,
        status: LeaveStatus,
        manager_comments: Optional[str],
    ) -> bool:
        with self._lock:
            current = self._records.get(int(leave_id))
            if not current or current.status != LeaveStatus.PENDING:
                return False
            self._records[current.leave_id] = current.with_decision(status, manager_comments, now_local())
            return True

    def delete(self, leave_id: int) -> bool:
        with self._lock:
            return self._records.pop(int(leave_id), None) is not None
