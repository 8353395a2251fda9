"""Spinning guard: exclusivity, guaranteed release and refusal to nest."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from lib_failure_message.domain.errors import NestedInterceptionError
from lib_failure_message.domain.guard import GlobalInterceptionGuard


def test_held_releases_on_normal_exit() -> None:
    guard = GlobalInterceptionGuard()
    with guard.held():
        assert guard.is_held
    assert not guard.is_held


def test_held_releases_when_block_raises() -> None:
    guard = GlobalInterceptionGuard()
    with pytest.raises(AssertionError):
        with guard.held():
            raise AssertionError("test failed inside the guard")
    assert not guard.is_held


def test_same_thread_reacquire_is_refused() -> None:
    guard = GlobalInterceptionGuard()
    with guard.held():
        with pytest.raises(NestedInterceptionError):
            guard.acquire()
        assert guard.is_held
    assert not guard.is_held


def test_dependent_thread_is_refused_instead_of_spinning() -> None:
    guard = GlobalInterceptionGuard(is_dependent=lambda thread: thread.name == "dependent")
    errors: list[BaseException] = []

    def _dependent() -> None:
        try:
            guard.acquire()
        except NestedInterceptionError as exc:
            errors.append(exc)

    with guard.held():
        worker = threading.Thread(target=_dependent, name="dependent")
        worker.start()
        worker.join()
    assert len(errors) == 1


def test_dependent_thread_may_acquire_a_free_guard() -> None:
    guard = GlobalInterceptionGuard(is_dependent=lambda thread: True)
    with guard.held():
        assert guard.is_held


def test_waiter_proceeds_after_release() -> None:
    guard = GlobalInterceptionGuard()
    holder_ready = threading.Event()
    release_holder = threading.Event()
    order: list[str] = []

    def _holder() -> None:
        with guard.held():
            holder_ready.set()
            release_holder.wait()
            order.append("holder")

    def _waiter() -> None:
        holder_ready.wait()
        with guard.held():
            order.append("waiter")

    threads = [threading.Thread(target=_holder), threading.Thread(target=_waiter)]
    for thread in threads:
        thread.start()
    holder_ready.wait()
    release_holder.set()
    for thread in threads:
        thread.join()
    assert order == ["holder", "waiter"]


@pytest.mark.concurrency
@pytest.mark.parametrize("yield_interpreter", [True, False])
def test_at_most_one_holder_under_contention(yield_interpreter: bool) -> None:
    guard = GlobalInterceptionGuard()
    lock = threading.Lock()
    inside = 0
    peak = 0

    def _critical(_: int) -> None:
        nonlocal inside, peak
        with guard.held(yield_interpreter=yield_interpreter):
            with lock:
                inside += 1
                peak = max(peak, inside)
            with lock:
                inside -= 1

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(_critical, range(200)))
    assert peak == 1
    assert not guard.is_held
