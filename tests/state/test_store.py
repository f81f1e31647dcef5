from __future__ import annotations

import threading

import pytest

from src.payroll_hub.payroll_hub.employees.model import EmployeeRecord
from src.payroll_hub.payroll_hub.state.memory_repository import InMemoryStateRepository
from src.payroll_hub.payroll_hub.state.model import PayrollState, seed_state
from src.payroll_hub.payroll_hub.state.store import StateStore


class FailingRepo(InMemoryStateRepository):
    def save_state(self, state: PayrollState) -> None:
        raise RuntimeError("disk full")


def test_first_load_seeds_and_persists_roster():
    repo = InMemoryStateRepository()
    store = StateStore(repo)

    state = store.load()

    assert set(state.employees) == {"emp_001", "emp_002", "emp_003"}
    assert repo.save_count == 1
    assert repo.employees_json is not None


def test_load_restores_persisted_state():
    repo = InMemoryStateRepository()
    repo.save_state(seed_state().with_employee(EmployeeRecord(id="emp_777", name="Nina")))

    store = StateStore(repo)
    store.load()

    assert store.snapshot().get_employee("emp_777").name == "Nina"


def test_commit_persists_and_returns_result():
    repo = InMemoryStateRepository()
    store = StateStore(repo)
    store.load()

    result = store.commit(lambda s: (s.with_employee(EmployeeRecord(id="emp_x", name="X")), "done"))

    assert result == "done"
    assert "emp_x" in store.snapshot().employees
    assert "emp_x" in repo.employees_json


def test_failed_change_or_save_leaves_state_unchanged():
    store = StateStore(InMemoryStateRepository())
    store.load()
    before = store.snapshot()

    def boom(state):
        raise ValueError("nope")

    with pytest.raises(ValueError):
        store.commit(boom)
    assert store.snapshot() is before

    failing = StateStore(FailingRepo())
    with pytest.raises(RuntimeError):
        failing.commit(lambda s: (s.with_employee(EmployeeRecord(id="emp_x", name="X")), None))
    assert "emp_x" not in failing.snapshot().employees


def test_concurrent_commits_are_not_lost():
    store = StateStore(InMemoryStateRepository())
    store.load()

    def add(i):
        store.commit(lambda s: (s.with_employee(EmployeeRecord(id=f"emp_t{i}", name=str(i))), None))

    threads = [threading.Thread(target=add, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store.snapshot().employees) == 23
