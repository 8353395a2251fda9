"""Composition root for ``lib_failure_message``.

Purpose
-------
Provide the single entry point that orchestrates guard acquisition, hook
installation, the capture use case, and the message comparison.

Contents
--------
* :data:`INTERCEPTION_GUARD` – the process-wide guard around
  :func:`threading.excepthook`.
* :func:`assert_failure_message` – public assertion (alias
  :func:`assert_message`).

System Role
-----------
Wires the domain relay and guard, the ``threading.excepthook`` adapter and the
capturer together while emitting structured observability signals. Settings
are read from the environment on every call.
"""

from __future__ import annotations

import threading
from typing import Callable, Mapping

from .adapters.env.default import load_settings
from .adapters.hooks.threading_hook import ThreadingHookInstaller
from .application.capture import Capturer, Completed, is_capture_thread
from .domain.errors import CallbackDidNotFailError, MessageMismatchError
from .domain.guard import GlobalInterceptionGuard
from .domain.relay import MessageRelay
from .observability import log_debug, log_info, make_event

INTERCEPTION_GUARD = GlobalInterceptionGuard(is_dependent=is_capture_thread)
"""Sole guard for the sole ``threading.excepthook`` slot of the process."""


def assert_failure_message(
    callback: Callable[[], object],
    expected: str,
    *,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Assert that *callback* fails with a message containing *expected*.

    Why
    ----
    Long or multi-line expected messages do not fit comfortably into
    ``pytest.raises(match=...)`` patterns, which are regular expressions and
    need escaping. This helper compares plain text and works while other
    tests run the same assertion on parallel threads.

    What
    ----
    Holds :data:`INTERCEPTION_GUARD`, installs the interceptor bound to a
    fresh relay, runs *callback* on a capture thread, uninstalls the
    interceptor, then compares the captured text with *expected*.

    Parameters
    ----------
    callback:
        Zero-argument callable expected to raise.
    expected:
        Substring the captured failure text must contain.
    environ:
        Environment mapping used for settings; defaults to :data:`os.environ`.

    Raises
    ------
    CallbackDidNotFailError
        *callback* returned normally.
    MessageMismatchError
        *callback* failed but its text does not contain *expected*.
    NestedInterceptionError
        Called from inside a callable that is itself under test.
    InterceptorBypassedError
        The callable replaced :func:`threading.excepthook` before failing.

    Examples
    --------
    >>> def explode():
    ...     raise RuntimeError("disk quota exceeded")
    >>> assert_failure_message(explode, "quota exceeded")
    >>> assert_failure_message(lambda: None, "anything")
    Traceback (most recent call last):
    ...
    lib_failure_message.domain.errors.CallbackDidNotFailError: callable provided did not fail at all.
    """

    settings = load_settings(environ)
    caller = threading.current_thread().name
    with INTERCEPTION_GUARD.held(yield_interpreter=settings.spin_yield):
        log_debug("guard_acquired", **make_event("guard", caller))
        try:
            relay = MessageRelay()
            installer = ThreadingHookInstaller(accepts=is_capture_thread, include_location=settings.include_location)
            with installer.installed(relay):
                outcome = Capturer().run(callback, relay)
            if isinstance(outcome, Completed):
                log_info("callback_did_not_fail", **make_event("compare", caller))
                raise CallbackDidNotFailError()
            message = outcome.message(yield_interpreter=settings.spin_yield)
            if expected not in message:
                log_info("message_mismatch", **make_event("compare", caller, {"expected_length": len(expected)}))
                raise MessageMismatchError(message, expected)
            log_debug("message_matched", **make_event("compare", caller))
        finally:
            log_debug("guard_released", **make_event("guard", caller))


assert_message = assert_failure_message


__all__ = [
    "INTERCEPTION_GUARD",
    "assert_failure_message",
    "assert_message",
]
