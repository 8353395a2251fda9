"""Process-wide exclusive guard around the interception hook.

Purpose
-------
:func:`threading.excepthook` is a single process-wide slot. Concurrent callers
must not install or remove interceptors over one another, otherwise a capture
could publish into the wrong relay or restore the wrong previous hook.

Contents
--------
* :class:`GlobalInterceptionGuard` – spinning mutual exclusion with guaranteed
  release through :meth:`GlobalInterceptionGuard.held`.

The single process-wide instance is created by the composition root
(:data:`lib_failure_message.core.INTERCEPTION_GUARD`), which also knows how to
recognise capture threads.

System Role
-----------
Acquired once per :func:`lib_failure_message.assert_failure_message` call. The
critical section (install hook, run one callback, uninstall hook) is short, so
the guard spins on a non-blocking try-acquire instead of parking the thread.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable, Iterator

from .errors import NestedInterceptionError
from .spin import spin_until


class GlobalInterceptionGuard:
    """Spinning, non re-entrant mutual exclusion.

    ``is_dependent`` lets the composition root flag threads that only run on
    behalf of the current holder (capture threads). Such threads can never
    acquire the guard while the holder waits for them, so they fail fast with
    :class:`NestedInterceptionError`.

    Examples
    --------
    >>> guard = GlobalInterceptionGuard()
    >>> with guard.held():
    ...     guard.is_held
    True
    >>> guard.is_held
    False
    """

    def __init__(self, *, is_dependent: Callable[[threading.Thread], bool] | None = None) -> None:
        self._lock = threading.Lock()
        self._holder: int | None = None
        self._is_dependent = is_dependent

    @property
    def is_held(self) -> bool:
        return self._lock.locked()

    def acquire(self, *, yield_interpreter: bool = True) -> None:
        """Spin until the guard moves from free to held for the calling thread."""

        if self._lock.locked():
            self._refuse_nested()
        spin_until(lambda: self._lock.acquire(blocking=False), yield_interpreter=yield_interpreter)
        self._holder = threading.get_ident()

    def release(self) -> None:
        """Return the guard to free."""

        self._holder = None
        self._lock.release()

    @contextmanager
    def held(self, *, yield_interpreter: bool = True) -> Iterator[None]:
        """Hold the guard for the duration of the ``with`` block.

        Release runs on every exit path, including assertion failures and
        unexpected exceptions raised inside the block.
        """

        self.acquire(yield_interpreter=yield_interpreter)
        try:
            yield
        finally:
            self.release()

    def _refuse_nested(self) -> None:
        if self._holder == threading.get_ident():
            raise NestedInterceptionError("interception guard is not re-entrant")
        if self._is_dependent is not None and self._is_dependent(threading.current_thread()):
            raise NestedInterceptionError("interception guard requested from inside a callable under test")
