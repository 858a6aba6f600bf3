"""Example: drive the leave service directly (no Flask).

Controllers are a thin layer; the business rules live in LeaveLifecycleService.
Runs against the in-memory backend so no database is needed.
"""

from datetime import date

from src.leave_manager.leave_manager.container import build_container
from src.leave_manager.leave_manager.leaves.model import LeaveRecord


def main():
    container = build_container(storage_backend="memory")
    service = container.leave_service

    outcome = service.submit(LeaveRecord("E1", date(2024, 1, 10), date(2024, 1, 14), "Family trip"))
    print("submit:", outcome)
    print("approve:", service.approve(outcome.leave_id, "Enjoy"))
    print("balance:", service.balance("E1"))

    clash = service.submit(LeaveRecord("E1", date(2024, 1, 12), date(2024, 1, 13), "Dentist"))
    print("overlap:", clash.reason, clash.message)


if __name__ == "__main__":
    main()
