"""``threading.excepthook`` adapter.

Purpose
-------
Implement the :class:`~lib_failure_message.application.ports.HookInstaller`
port on top of :func:`threading.excepthook`, the interpreter's process-wide
callback for exceptions that are about to end a thread.

Key behaviours
--------------
* The interceptor runs on the failing thread, before the thread finishes,
  and publishes the formatted failure into the bound relay.
* Failures from threads the installer does not accept are forwarded to the
  hook that was active before installation, so unrelated threads keep their
  normal reporting.
* ``uninstall`` restores exactly the saved hook object.
"""

from __future__ import annotations

import threading
import traceback
from contextlib import contextmanager
from types import TracebackType
from typing import Any, Callable, Iterator

from ...domain.errors import HookAlreadyInstalledError, HookNotInstalledError
from ...domain.relay import MessageRelay
from ...observability import log_debug, make_event

ExceptHook = Callable[[Any], object]


def format_failure(
    exc_type: type[BaseException],
    exc_value: BaseException | None,
    exc_traceback: TracebackType | None,
    *,
    include_location: bool = True,
) -> str:
    """Render a failure as text the way the interceptor publishes it.

    The body is :func:`traceback.format_exception_only` output (type, message
    and any notes). With ``include_location`` it is preceded by
    ``raised at <file>:<line>:`` for the innermost traceback frame.

    Examples
    --------
    >>> format_failure(ValueError, ValueError("boom"), None)
    'ValueError: boom'
    """

    body = "".join(traceback.format_exception_only(exc_type, exc_value))
    # drop only the terminator added by format_exception_only
    body = body[:-1] if body.endswith("\n") else body
    if not include_location:
        return body
    location = _innermost_location(exc_traceback)
    if location is None:
        return body
    return f"raised at {location}:\n{body}"


def _innermost_location(exc_traceback: TracebackType | None) -> str | None:
    frames = traceback.extract_tb(exc_traceback)
    if not frames:
        return None
    frame = frames[-1]
    return f"{frame.filename}:{frame.lineno}"


class ThreadingHookInstaller:
    """Install an interceptor into :func:`threading.excepthook`.

    Parameters
    ----------
    accepts:
        Predicate selecting the threads whose failures are captured. ``None``
        captures every thread.
    include_location:
        Forwarded to :func:`format_failure`.

    Examples
    --------
    >>> import threading
    >>> relay = MessageRelay()
    >>> installer = ThreadingHookInstaller()
    >>> with installer.installed(relay):
    ...     worker = threading.Thread(target=lambda: 1 / 0)
    ...     worker.start()
    ...     worker.join()
    >>> relay.consume().splitlines()[-1]
    'ZeroDivisionError: division by zero'
    """

    def __init__(
        self,
        *,
        accepts: Callable[[threading.Thread], bool] | None = None,
        include_location: bool = True,
    ) -> None:
        self._accepts = accepts
        self._include_location = include_location
        self._relay: MessageRelay | None = None
        self._previous: ExceptHook | None = None
        self._installed = False

    @property
    def is_installed(self) -> bool:
        return self._installed

    def install(self, relay: MessageRelay) -> None:
        if self._installed:
            raise HookAlreadyInstalledError("interceptor is already installed; nesting is not supported")
        self._relay = relay
        self._previous = threading.excepthook
        threading.excepthook = self._intercept
        self._installed = True
        log_debug("hook_installed", **make_event("hook", threading.current_thread().name))

    def uninstall(self) -> None:
        if not self._installed:
            raise HookNotInstalledError("interceptor is not installed")
        threading.excepthook = self._previous
        self._installed = False
        self._previous = None
        self._relay = None
        log_debug("hook_uninstalled", **make_event("hook", threading.current_thread().name))

    @contextmanager
    def installed(self, relay: MessageRelay) -> Iterator[None]:
        self.install(relay)
        try:
            yield
        finally:
            self.uninstall()

    def _intercept(self, args: Any) -> None:
        relay, previous = self._relay, self._previous
        thread = args.thread
        thread_name = getattr(thread, "name", None)
        if relay is None or (self._accepts is not None and not self._accepts(thread)):
            log_debug("failure_forwarded", **make_event("hook", thread_name))
            (previous or threading.__excepthook__)(args)
            return
        message = format_failure(
            args.exc_type,
            args.exc_value,
            args.exc_traceback,
            include_location=self._include_location,
        )
        relay.publish(message)
        log_debug("failure_intercepted", **make_event("hook", thread_name, {"exc_type": args.exc_type.__name__}))
