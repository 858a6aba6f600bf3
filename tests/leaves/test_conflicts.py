from __future__ import annotations

from datetime import date

import pytest

from src.leave_manager.leave_manager.core.enums import LeaveStatus
from src.leave_manager.leave_manager.leaves.conflicts import ConflictChecker
from src.leave_manager.leave_manager.leaves.model import LeaveRecord


def _leave(start, end, *, leave_id=None, status=LeaveStatus.PENDING):
    return LeaveRecord(
        employee_id="E1",
        start_date=start,
        end_date=end,
        reason="r",
        status=status,
        leave_id=leave_id,
    )


def test_adjacent_ranges_do_not_conflict():
    checker = ConflictChecker()
    existing = [_leave(date(2024, 1, 1), date(2024, 1, 5), leave_id=1)]
    assert not checker.has_conflict(_leave(date(2024, 1, 6), date(2024, 1, 10)), existing)


def test_shared_boundary_day_conflicts():
    checker = ConflictChecker()
    existing = [_leave(date(2024, 1, 1), date(2024, 1, 5), leave_id=1)]
    assert checker.has_conflict(_leave(date(2024, 1, 5), date(2024, 1, 10)), existing)


@pytest.mark.parametrize(
    "a, b",
    [
        ((date(2024, 1, 1), date(2024, 1, 5)), (date(2024, 1, 3), date(2024, 1, 4))),
        ((date(2024, 1, 1), date(2024, 1, 5)), (date(2024, 1, 6), date(2024, 1, 6))),
        ((date(2024, 1, 1), date(2024, 1, 1)), (date(2024, 1, 1), date(2024, 1, 1))),
        ((date(2024, 2, 1), date(2024, 2, 10)), (date(2024, 1, 20), date(2024, 2, 1))),
        ((date(2024, 3, 1), date(2024, 3, 2)), (date(2024, 1, 1), date(2024, 1, 2))),
    ],
)
def test_overlap_is_symmetric(a, b):
    checker = ConflictChecker()
    left = _leave(*a, leave_id=1)
    right = _leave(*b, leave_id=2)
    assert checker.has_conflict(left, [right]) == checker.has_conflict(right, [left])


def test_rejected_requests_are_ignored():
    checker = ConflictChecker()
    existing = [_leave(date(2024, 1, 1), date(2024, 1, 5), leave_id=1, status=LeaveStatus.REJECTED)]
    assert not checker.has_conflict(_leave(date(2024, 1, 2), date(2024, 1, 3)), existing)


def test_approved_requests_block_the_calendar():
    checker = ConflictChecker()
    existing = [_leave(date(2024, 1, 1), date(2024, 1, 5), leave_id=1, status=LeaveStatus.APPROVED)]
    clash = checker.find_conflict(_leave(date(2024, 1, 2), date(2024, 1, 3)), existing)
    assert clash is existing[0]


def test_persisted_candidate_does_not_conflict_with_itself():
    checker = ConflictChecker()
    stored = _leave(date(2024, 1, 1), date(2024, 1, 5), leave_id=7)
    assert not checker.has_conflict(stored, [stored])


def test_unpersisted_candidate_compares_against_everything():
    checker = ConflictChecker()
    existing = [_leave(date(2024, 1, 1), date(2024, 1, 1), leave_id=None)]
    assert checker.has_conflict(_leave(date(2024, 1, 1), date(2024, 1, 1)), existing)


def test_empty_existing_set_has_no_conflict():
    assert not ConflictChecker().has_conflict(_leave(date(2024, 1, 1), date(2024, 1, 2)), [])
