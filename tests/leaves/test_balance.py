from __future__ import annotations

from datetime import date

import pytest

from src.leave_manager.leave_manager.core.enums import LeaveStatus
from src.leave_manager.leave_manager.leaves.balance import BalanceCalculator, FlatAllowancePolicy
from src.leave_manager.leave_manager.leaves.model import LeaveRecord


class FakeLeavesRepo:
    def __init__(self, records):
        self._records = list(records)
        self.calls = 0

    def list_approved_by_employee(self, employee_id):
        self.calls += 1
        return [r for r in self._records if r.employee_id == employee_id and r.status == LeaveStatus.APPROVED]


def _approved(employee_id, start, end, leave_id):
    return LeaveRecord(
        employee_id=employee_id,
        start_date=start,
        end_date=end,
        reason="r",
        status=LeaveStatus.APPROVED,
        leave_id=leave_id,
    )


def test_no_approved_records_gives_full_allowance():
    calc = BalanceCalculator(FakeLeavesRepo([]))
    assert calc.approved_days_used("E1") == 0
    assert calc.available_days("E1") == 20


def test_only_approved_days_of_the_employee_are_counted():
    records = [
        _approved("E1", date(2024, 1, 10), date(2024, 1, 14), 1),
        _approved("E2", date(2024, 1, 10), date(2024, 1, 19), 2),
        LeaveRecord("E1", date(2024, 2, 1), date(2024, 2, 3), "p", leave_id=3),
    ]
    calc = BalanceCalculator(FakeLeavesRepo(records))
    assert calc.approved_days_used("E1") == 5
    assert calc.available_days("E1") == 15


def test_available_days_is_clamped_at_zero():
    records = [
        _approved("E1", date(2024, 1, 1), date(2024, 1, 15), 1),
        _approved("E1", date(2024, 3, 1), date(2024, 3, 10), 2),
    ]
    calc = BalanceCalculator(FakeLeavesRepo(records))
    assert calc.approved_days_used("E1") == 25
    assert calc.available_days("E1") == 0
    assert calc.balance("E1").available == 0


def test_balance_is_read_fresh_and_idempotent():
    repo = FakeLeavesRepo([_approved("E1", date(2024, 1, 1), date(2024, 1, 2), 1)])
    calc = BalanceCalculator(repo)
    assert calc.available_days("E1") == calc.available_days("E1") == 18
    assert repo.calls == 2


def test_custom_allowance_policy_is_used():
    calc = BalanceCalculator(FakeLeavesRepo([]), FlatAllowancePolicy(30))
    summary = calc.balance("E9")
    assert (summary.allowance, summary.used, summary.available) == (30, 0, 30)


def test_negative_allowance_is_refused():
    with pytest.raises(ValueError):
        FlatAllowancePolicy(-1)
