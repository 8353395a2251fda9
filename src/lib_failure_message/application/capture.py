"""Capture use case: run a callable behind a failure-catching boundary.

Purpose
-------
Execute the callable under test so that a failure becomes a local outcome
(:class:`Completed` or :class:`Failed`) instead of propagating past the
orchestrator.

Contents
--------
* :class:`CaptureThread` – thread that runs the callable inside a copy of the
  caller's :mod:`contextvars` context.
* :func:`is_capture_thread` – predicate used by the hook adapter and the
  guard to recognise capture threads.
* :class:`Completed` / :class:`Failed` – outcome types. Only :class:`Failed`
  exposes the captured message.
* :class:`Capturer` – starts a capture thread and joins it.

System Role
-----------
The boundary is the thread itself: an exception escaping
:meth:`CaptureThread.run` is handed by the interpreter to
:func:`threading.excepthook` on the capture thread, which is where the hook
adapter publishes the message. The capturer therefore never sees the message;
it travels only through the :class:`~lib_failure_message.domain.relay.MessageRelay`.
"""

from __future__ import annotations

import contextvars
import itertools
import threading
from dataclasses import dataclass
from typing import Callable, ClassVar

from ..domain.errors import InterceptorBypassedError
from ..domain.relay import MessageRelay
from ..observability import log_debug, log_error, make_event

_SEQUENCE = itertools.count(1)


class CaptureThread(threading.Thread):
    """Daemon thread running one callable under test.

    ``completed`` is only set when the callable returns normally. It is read
    after :meth:`join`, which orders the write before the read.
    """

    def __init__(self, callback: Callable[[], object]) -> None:
        super().__init__(name=f"failure-capture-{next(_SEQUENCE)}", daemon=True)
        self._callback = callback
        self._context = contextvars.copy_context()
        self.completed = False

    def run(self) -> None:
        self._context.run(self._callback)
        self.completed = True


def is_capture_thread(thread: threading.Thread) -> bool:
    return isinstance(thread, CaptureThread)


@dataclass(frozen=True, slots=True)
class Completed:
    """The callable returned normally."""

    failed: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class Failed:
    """The callable failed; its message is waiting in ``relay``.

    Examples
    --------
    >>> relay = MessageRelay()
    >>> relay.publish("ValueError: boom")
    >>> Failed(relay).message()
    'ValueError: boom'
    """

    relay: MessageRelay
    failed: ClassVar[bool] = True

    def message(self, *, yield_interpreter: bool = True) -> str:
        """Wait for the interceptor's publication and move the message out.

        Can be called once; a second call raises
        :class:`~lib_failure_message.domain.errors.RelayConsumedError`.
        """

        self.relay.await_ready(yield_interpreter=yield_interpreter)
        return self.relay.consume()


CaptureOutcome = Completed | Failed


class Capturer:
    """Run callables on a :class:`CaptureThread` and report the outcome."""

    def run(self, callback: Callable[[], object], relay: MessageRelay) -> CaptureOutcome:
        """Run *callback* to completion and classify the result.

        The hook bound to *relay* must already be installed. ``join`` returns
        only after :func:`threading.excepthook` has run on the capture thread,
        so a failed callback with an empty relay means the interceptor was
        bypassed.

        Raises
        ------
        InterceptorBypassedError
            The callback failed but nothing was published into *relay*.
        """

        thread = CaptureThread(callback)
        thread.start()
        thread.join()
        if thread.completed:
            log_debug("callback_completed", **make_event("capture", thread.name))
            return Completed()
        if not relay.is_ready:
            log_error("interceptor_bypassed", **make_event("capture", thread.name))
            raise InterceptorBypassedError(f"{thread.name} failed but its failure never reached the interceptor")
        log_debug("callback_failed", **make_event("capture", thread.name))
        return Failed(relay)
