from __future__ import annotations

import pytest

from lib_failure_message.domain.errors import (
    DID_NOT_FAIL_MESSAGE,
    MISMATCH_HEADER,
    CallbackDidNotFailError,
    FailureMessageError,
    HookAlreadyInstalledError,
    HookNotInstalledError,
    InterceptionProtocolError,
    InterceptorBypassedError,
    InvalidSettingError,
    MessageAssertionError,
    MessageMismatchError,
    NestedInterceptionError,
    RelayAlreadyPublishedError,
    RelayConsumedError,
    RelayNotReadyError,
)


def test_error_hierarchy() -> None:
    assert issubclass(MessageAssertionError, AssertionError)
    assert issubclass(InterceptionProtocolError, RuntimeError)
    assert issubclass(InvalidSettingError, ValueError)
    for kind in (CallbackDidNotFailError, MessageMismatchError):
        assert issubclass(kind, MessageAssertionError)
    for kind in (
        RelayNotReadyError,
        RelayConsumedError,
        RelayAlreadyPublishedError,
        HookAlreadyInstalledError,
        HookNotInstalledError,
        NestedInterceptionError,
        InterceptorBypassedError,
    ):
        assert issubclass(kind, InterceptionProtocolError)
    for kind in (MessageAssertionError, InterceptionProtocolError, InvalidSettingError):
        assert issubclass(kind, FailureMessageError)


def test_did_not_fail_text_is_fixed() -> None:
    assert str(CallbackDidNotFailError()) == DID_NOT_FAIL_MESSAGE


def test_mismatch_text_quotes_both_sides() -> None:
    error = MessageMismatchError("RuntimeError: disk full", "quota")
    assert str(error) == f"{MISMATCH_HEADER}\nMSG: RuntimeError: disk full\nEXP: quota"
    assert error.message == "RuntimeError: disk full"
    assert error.expected == "quota"


def test_assertion_errors_are_caught_as_assertions() -> None:
    with pytest.raises(AssertionError):
        raise MessageMismatchError("a", "b")
