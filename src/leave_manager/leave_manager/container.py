from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_ANNUAL_ALLOWANCE_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .leaves.balance import BalanceCalculator, FlatAllowancePolicy
from .leaves.conflicts import ConflictChecker
from .leaves.locks import EmployeeLocks
from .leaves.memory_leave_repository import InMemoryLeaveRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveLifecycleService

STORAGE_BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    leaves_repo: LeaveRepository

    balance_calculator: BalanceCalculator
    leave_service: LeaveLifecycleService


def build_container(
    *,
    db_config: dict | None = None,
    storage_backend: str = "mysql",
    annual_allowance: int = DEFAULT_ANNUAL_ALLOWANCE_DAYS,
    serialize_writes: bool = True,
    check_balance_on_approve: bool = False,
) -> Container:
    """Wire repositories and services once at process start."""
    backend = (storage_backend or "mysql").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(f"Unknown storage backend: {storage_backend!r}")

    conn: Optional[DatabaseConnection] = None
    if backend == "mysql":
        if db_config is None:
            raise ValueError("db_config is required for the mysql storage backend")
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        leaves_repo: LeaveRepository = MySQLLeaveRepository(conn)
    else:
        leaves_repo = InMemoryLeaveRepository()

    balance_calculator = BalanceCalculator(leaves_repo, FlatAllowancePolicy(int(annual_allowance)))
    leave_service = LeaveLifecycleService(
        leaves_repo,
        balance_calculator,
        conflicts=ConflictChecker(),
        locks=EmployeeLocks(enabled=serialize_writes),
        check_balance_on_approve=check_balance_on_approve,
    )

    return Container(
        conn=conn,
        leaves_repo=leaves_repo,
        balance_calculator=balance_calculator,
        leave_service=leave_service,
    )
