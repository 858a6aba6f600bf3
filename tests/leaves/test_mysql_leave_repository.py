from __future__ import annotations

from datetime import date, datetime

import mysql.connector
import pytest

from src.leave_manager.leave_manager.core.enums import LeaveStatus
from src.leave_manager.leave_manager.core.exceptions import StorageError
from src.leave_manager.leave_manager.leaves.model import LeaveRecord
from src.leave_manager.leave_manager.leaves.mysql_leave_repository import MySQLLeaveRepository


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = None
        self.rowcount = 0
        self._rows = []

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), tuple(params)))
        if self._conn.error:
            raise self._conn.error
        self.lastrowid = self._conn.lastrowid
        self.rowcount = self._conn.rowcount
        self._rows = list(self._conn.rows)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return self._rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, *, rows=(), rowcount=0, lastrowid=None, error=None):
        self.rows = rows
        self.rowcount = rowcount
        self.lastrowid = lastrowid
        self.error = error
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, conn):
        self._conn = conn

    def connect(self):
        return self._conn


def _row(**overrides):
    row = {
        "leave_id": 3,
        "employee_id": "E1",
        "start_date": date(2024, 1, 10),
        "end_date": date(2024, 1, 14),
        "reason": "Family trip",
        "status": "APPROVED",
        "manager_comments": "Enjoy",
        "created_at": datetime(2024, 1, 1, 9, 0),
        "decided_at": datetime(2024, 1, 2, 9, 0),
    }
    row.update(overrides)
    return row


def test_insert_forces_pending_and_returns_lastrowid():
    conn = FakeConnection(lastrowid=42)
    repo = MySQLLeaveRepository(FakeConnFactory(conn))

    leave_id = repo.insert(LeaveRecord("E1", date(2024, 1, 1), date(2024, 1, 2), "r", status=LeaveStatus.APPROVED))

    assert leave_id == 42
    sql, params = conn.executed[0]
    assert sql.startswith("INSERT INTO leave_requests")
    assert params[-1] == "PENDING"
    assert conn.committed and conn.closed


def test_get_by_id_maps_row_to_record():
    conn = FakeConnection(rows=[_row()])
    record = MySQLLeaveRepository(FakeConnFactory(conn)).get_by_id(3)

    assert record.leave_id == 3
    assert record.status == LeaveStatus.APPROVED
    assert record.duration_in_days == 5
    assert record.manager_comments == "Enjoy"


def test_get_by_id_missing_returns_none():
    conn = FakeConnection(rows=[])
    assert MySQLLeaveRepository(FakeConnFactory(conn)).get_by_id(3) is None


def test_list_approved_filters_on_status():
    conn = FakeConnection(rows=[_row(), _row(leave_id=4)])
    records = MySQLLeaveRepository(FakeConnFactory(conn)).list_approved_by_employee("E1")

    assert [r.leave_id for r in records] == [3, 4]
    sql, params = conn.executed[0]
    assert "employee_id=%s AND status=%s" in sql
    assert params == ("E1", "APPROVED")


def test_list_by_status_applies_limit():
    conn = FakeConnection(rows=[])
    MySQLLeaveRepository(FakeConnFactory(conn)).list_by_status(LeaveStatus.PENDING, limit=10)
    sql, params = conn.executed[0]
    assert sql.endswith("LIMIT %s")
    assert params == ("PENDING", 10)


def test_update_decision_is_guarded_by_pending_status():
    conn = FakeConnection(rowcount=0)
    ok = MySQLLeaveRepository(FakeConnFactory(conn)).update_decision(
        3, status=LeaveStatus.REJECTED, manager_comments="no"
    )

    assert not ok
    sql, params = conn.executed[0]
    assert "WHERE leave_id=%s AND status=%s" in sql
    assert params == ("REJECTED", "no", 3, "PENDING")


def test_update_without_changes_still_reports_existing_row():
    conn = FakeConnection(rowcount=0, rows=[{"found": 1}])
    record = LeaveRecord("E1", date(2024, 1, 1), date(2024, 1, 2), "r", leave_id=3)
    assert MySQLLeaveRepository(FakeConnFactory(conn)).update(record)
    assert len(conn.executed) == 2


def test_delete_reports_affected_rows():
    assert MySQLLeaveRepository(FakeConnFactory(FakeConnection(rowcount=1))).delete(3)
    assert not MySQLLeaveRepository(FakeConnFactory(FakeConnection(rowcount=0))).delete(3)


def test_driver_errors_become_storage_errors_and_roll_back():
    conn = FakeConnection(error=mysql.connector.Error("lost connection"))
    repo = MySQLLeaveRepository(FakeConnFactory(conn))

    with pytest.raises(StorageError):
        repo.delete(3)

    assert conn.rolled_back
    assert not conn.committed
    assert conn.closed
