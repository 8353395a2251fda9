"""Structured logging helpers for the interception protocol.

Purpose
    Keep every emission of logging data predictable and contextual without
    forcing applications (or test suites) to adopt a specific logging backend.

Contents
    - ``TRACE_ID``: context variable storing the active trace identifier.
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``bind_trace_id``: binds or clears the active trace identifier.
    - ``log_debug`` / ``log_info`` / ``log_error``: emit structured entries via a
      single private emitter.
    - ``make_event``: convenience builder for structured event payloads.

System Integration
    Used by the guard wiring, the hook adapter, the capturer and the
    composition root so every phase of an assertion carries the same trace
    metadata. The callable under test runs inside a copy of the caller's
    context, so a trace id bound by the test is visible to its own logging.
    The interception hook runs after that context has been left and logs
    without a trace id.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_failure_message_trace_id", default=None)
"""Current trace identifier propagated through logging helpers."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_failure_message")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers.

    Why
        Leaves the library silent by default while giving host test suites full
        control over handler and formatter configuration.
    """

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Examples
    --------
    >>> bind_trace_id('test-42')
    >>> TRACE_ID.get()
    'test-42'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry that includes the trace context."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info log entry that includes the trace context."""

    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error log entry that includes the trace context."""

    _emit(logging.ERROR, message, fields)


def make_event(
    phase: str,
    thread: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured logging payload for protocol lifecycle events.

    Inputs
        phase: Protocol phase being observed (``guard``, ``hook``, ``capture``,
            ``compare``, ``settings``).
        thread: Name of the thread the event concerns, if any.
        payload: Optional mapping with extra diagnostic detail.

    Examples
    --------
    >>> make_event('capture', 'MainThread', {'failed': True})
    {'phase': 'capture', 'thread': 'MainThread', 'failed': True}
    """

    event = _base_event(phase, thread)
    return _merge_payload(event, payload)


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": _with_trace(fields)})


def _with_trace(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Attach the current trace identifier to the provided structured fields."""

    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    return context


def _base_event(phase: str, thread: str | None) -> dict[str, Any]:
    return {"phase": phase, "thread": thread}


def _merge_payload(event: dict[str, Any], payload: Mapping[str, Any] | None) -> dict[str, Any]:
    if payload:
        event |= dict(payload)
    return event
