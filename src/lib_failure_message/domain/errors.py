"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the relay, the hook adapter, the
capturer, and the composition root. The hierarchy lives in the domain layer so
outer layers depend on it and never the other way round.

Contents
--------
* :class:`FailureMessageError` – umbrella base class for everything the library
  raises.
* :class:`MessageAssertionError` – test failures (``AssertionError`` family)
  surfaced to the test runner: :class:`CallbackDidNotFailError` and
  :class:`MessageMismatchError`.
* :class:`InterceptionProtocolError` – internal invariant violations that have
  no recovery path (relay misuse, hook misuse, nested interception).
* :class:`InvalidSettingError` – malformed environment configuration.

System Role
-----------
Test failures subclass :class:`AssertionError` so pytest, unittest and plain
``assert`` based harnesses render them as ordinary failures. Protocol errors
subclass :class:`RuntimeError` because they indicate a programming mistake,
not a failed expectation.
"""

from __future__ import annotations

from typing import Final

DID_NOT_FAIL_MESSAGE: Final[str] = "callable provided did not fail at all."
"""Fixed diagnostic raised when the callable under test returns normally."""

MISMATCH_HEADER: Final[str] = "MISMATCH — expected message not contained"
"""First line of the content-mismatch diagnostic."""


class FailureMessageError(Exception):
    """Base type for all exceptions emitted by ``lib_failure_message``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class MessageAssertionError(FailureMessageError, AssertionError):
    """An expectation about the callable's failure was not met.

    Why
    ----
    Test runners treat :class:`AssertionError` as a test failure rather than
    an error, which is the intended report for both subclasses.
    """


class CallbackDidNotFailError(MessageAssertionError):
    """The callable under test returned normally.

    This is a test-authoring mistake: a failure was required but none occurred.
    The message is always :data:`DID_NOT_FAIL_MESSAGE`.
    """

    def __init__(self) -> None:
        super().__init__(DID_NOT_FAIL_MESSAGE)


class MessageMismatchError(MessageAssertionError):
    """The callable failed, but its message does not contain the expected text.

    Attributes
    ----------
    message:
        Text captured at the interception point.
    expected:
        Substring the caller asked for.
    """

    def __init__(self, message: str, expected: str) -> None:
        self.message = message
        self.expected = expected
        super().__init__(f"{MISMATCH_HEADER}\nMSG: {message}\nEXP: {expected}")


class InterceptionProtocolError(FailureMessageError, RuntimeError):
    """An internal invariant of the interception protocol was violated.

    Why
    ----
    Double consumption of a relay, reading before readiness, or nesting the
    interception hook have no defined recovery. Raising immediately keeps the
    failure close to its cause.
    """


class RelayNotReadyError(InterceptionProtocolError):
    """A relay was consumed before any message was published into it."""


class RelayConsumedError(InterceptionProtocolError):
    """A relay was consumed a second time."""


class RelayAlreadyPublishedError(InterceptionProtocolError):
    """A second message was published into a single-assignment relay."""


class HookAlreadyInstalledError(InterceptionProtocolError):
    """``install`` was called on an installer that is already active."""


class HookNotInstalledError(InterceptionProtocolError):
    """``uninstall`` was called on an installer that is not active."""


class InterceptorBypassedError(InterceptionProtocolError):
    """A capture thread failed but the installed interceptor never saw the failure.

    Typical source: the callable under test replaced :func:`threading.excepthook`
    before raising.
    """


class NestedInterceptionError(InterceptionProtocolError):
    """The interception guard was requested by a thread that already depends on it.

    Typical source: calling :func:`lib_failure_message.assert_failure_message`
    from inside the callable under test. Spinning would never end because the
    outer call only releases the guard after the inner call returns.
    """


class InvalidSettingError(FailureMessageError, ValueError):
    """An environment setting could not be interpreted."""


__all__ = [
    "DID_NOT_FAIL_MESSAGE",
    "MISMATCH_HEADER",
    "CallbackDidNotFailError",
    "FailureMessageError",
    "HookAlreadyInstalledError",
    "HookNotInstalledError",
    "InterceptionProtocolError",
    "InterceptorBypassedError",
    "InvalidSettingError",
    "MessageAssertionError",
    "MessageMismatchError",
    "NestedInterceptionError",
    "RelayAlreadyPublishedError",
    "RelayConsumedError",
    "RelayNotReadyError",
]
