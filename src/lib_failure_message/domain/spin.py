"""Busy-wait helper shared by the guard and the relay."""

from __future__ import annotations

import time
from typing import Callable


def spin_until(condition: Callable[[], bool], *, yield_interpreter: bool = True) -> None:
    """Call *condition* repeatedly until it returns ``True``.

    There is no timeout; the surrounding test harness bounds the wait.
    With ``yield_interpreter`` each miss calls ``time.sleep(0)`` so the thread
    holding the resource gets the GIL back promptly instead of waiting for the
    interpreter's switch interval.

    Examples
    --------
    >>> attempts = iter([False, False, True])
    >>> spin_until(lambda: next(attempts))
    """

    while not condition():
        if yield_interpreter:
            time.sleep(0)
