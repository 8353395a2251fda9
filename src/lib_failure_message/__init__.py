"""Public package surface.

``assert_failure_message`` asserts on the text of a failure raised by a
callable, safely across test threads that share the process-wide
``threading.excepthook``. The error taxonomy, the logging helpers and the
settings loader are re-exported for callers that want to catch, observe or
configure the assertion.
"""

from __future__ import annotations

from .adapters.env.default import load_settings
from .adapters.hooks.threading_hook import format_failure
from .core import INTERCEPTION_GUARD, assert_failure_message, assert_message
from .domain.errors import (
    DID_NOT_FAIL_MESSAGE,
    CallbackDidNotFailError,
    FailureMessageError,
    InterceptionProtocolError,
    InterceptorBypassedError,
    InvalidSettingError,
    MessageAssertionError,
    MessageMismatchError,
    NestedInterceptionError,
)
from .domain.settings import Settings
from .observability import bind_trace_id, get_logger
from .testing import i_should_fail

__all__ = [
    "DID_NOT_FAIL_MESSAGE",
    "INTERCEPTION_GUARD",
    "CallbackDidNotFailError",
    "FailureMessageError",
    "InterceptionProtocolError",
    "InterceptorBypassedError",
    "InvalidSettingError",
    "MessageAssertionError",
    "MessageMismatchError",
    "NestedInterceptionError",
    "Settings",
    "assert_failure_message",
    "assert_message",
    "bind_trace_id",
    "format_failure",
    "get_logger",
    "i_should_fail",
    "load_settings",
]
