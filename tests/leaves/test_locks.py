from __future__ import annotations

import gc
import threading

from src.leave_manager.leave_manager.leaves.locks import EmployeeLocks


def test_lock_entry_lives_only_while_held():
    locks = EmployeeLocks()

    with locks.hold("E1"):
        assert len(locks) == 1
        with locks.hold("E2"):
            assert len(locks) == 2

    gc.collect()
    assert len(locks) == 0


def test_many_employees_do_not_accumulate_locks():
    locks = EmployeeLocks()
    for n in range(1000):
        with locks.hold(f"E{n}"):
            pass

    gc.collect()
    assert len(locks) == 0


def test_same_employee_is_serialized():
    locks = EmployeeLocks()
    inside = threading.Event()
    release = threading.Event()
    entered_second = threading.Event()

    def first():
        with locks.hold("E1"):
            inside.set()
            release.wait(timeout=5)

    def second():
        with locks.hold("E1"):
            entered_second.set()

    t1 = threading.Thread(target=first)
    t1.start()
    assert inside.wait(timeout=5)
    t2 = threading.Thread(target=second)
    t2.start()

    assert not entered_second.wait(timeout=0.2)
    assert len(locks) == 1
    release.set()
    t1.join(timeout=5)
    t2.join(timeout=5)
    assert entered_second.is_set()


def test_disabled_guard_registers_nothing():
    locks = EmployeeLocks(enabled=False)
    with locks.hold("E1"):
        assert len(locks) == 0
