from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRecord
from .repository import LeaveRepository

_COLUMNS = """
    leave_id, employee_id, start_date, end_date, reason,
    status, manager_comments, created_at, decided_at
"""


def _row_to_record(r: dict) -> LeaveRecord:
    return LeaveRecord(
        leave_id=int(r["leave_id"]),
        employee_id=str(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        manager_comments=r.get("manager_comments"),
        created_at=r.get("created_at"),
        decided_at=r.get("decided_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, record: LeaveRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    record.employee_id,
                    record.start_date,
                    record.end_date,
                    record.reason,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s",
                (int(leave_id),),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def _select(self, where: str, params: tuple, *, limit: Optional[int] = None) -> Sequence[LeaveRecord]:
        sql = f"SELECT {_COLUMNS} FROM leave_requests WHERE {where} ORDER BY start_date, leave_id"
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_by_employee(self, employee_id: str) -> Sequence[LeaveRecord]:
        return self._select("employee_id=%s", (employee_id,))

    def list_approved_by_employee(self, employee_id: str) -> Sequence[LeaveRecord]:
        return self._select("employee_id=%s AND status=%s", (employee_id, LeaveStatus.APPROVED.value))

    def list_by_status(self, status: LeaveStatus, *, limit: int = 500) -> Sequence[LeaveRecord]:
        return self._select("status=%s", (status.value,), limit=limit)

    def list_all(self, *, limit: int = 500) -> Sequence[LeaveRecord]:
        return self._select("1=1", (), limit=limit)

    def update(self, record: LeaveRecord) -> bool:
        if record.leave_id is None:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET start_date=%s, end_date=%s, reason=%s, status=%s, manager_comments=%s
                WHERE leave_id=%s
                """,
                (
                    record.start_date,
                    record.end_date,
                    record.reason,
                    record.status.value,
                    record.manager_comments,
                    int(record.leave_id),
                ),
            )
            # MySQL reports 0 affected rows when nothing changed, so check existence instead.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM leave_requests WHERE leave_id=%s", (int(record.leave_id),))
            return fetchone(cur) is not None

    def update_decision(
        self,
        leave_id: int,
        *,
        status: LeaveStatus,
        manager_comments: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, manager_comments=%s, decided_at=NOW()
                WHERE leave_id=%s AND status=%s
                """,
                (
                    status.value,
                    manager_comments,
                    int(leave_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            return cur.rowcount > 0
