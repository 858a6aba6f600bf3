from __future__ import annotations

from typing import Protocol

from ..core.constants import DEFAULT_ANNUAL_ALLOWANCE_DAYS
from .model import LeaveBalance
from .repository import LeaveRepository


class AllowancePolicy(Protocol):
    def allowance_for(self, employee_id: str) -> int:
        raise NotImplementedError


class FlatAllowancePolicy:
    """Same annual allowance for every employee."""

    def __init__(self, days: int = DEFAULT_ANNUAL_ALLOWANCE_DAYS):
        if int(days) < 0:
            raise ValueError("Allowance cannot be negative")
        self._days = int(days)

    def allowance_for(self, employee_id: str) -> int:
        return self._days


class BalanceCalculator:
    """Approved-day usage and remaining allowance, read fresh from the repository on every call."""

    def __init__(self, leaves: LeaveRepository, policy: AllowancePolicy | None = None):
        self._leaves = leaves
        self._policy = policy or FlatAllowancePolicy()

    def allowance_for(self, employee_id: str) -> int:
        return int(self._policy.allowance_for(employee_id))

    def approved_days_used(self, employee_id: str) -> int:
        return sum(r.duration_in_days for r in self._leaves.list_approved_by_employee(employee_id))

    def available_days(self, employee_id: str) -> int:
        # A deficit (e.g. allowance lowered after approvals) is clamped, not signaled.
        return max(0, self.allowance_for(employee_id) - self.approved_days_used(employee_id))

    def balance(self, employee_id: str) -> LeaveBalance:
        allowance = self.allowance_for(employee_id)
        used = self.approved_days_used(employee_id)
        return LeaveBalance(
            employee_id=employee_id,
            allowance=allowance,
            used=used,
            available=max(0, allowance - used),
        )
