"""``threading.excepthook`` adapter: capture, forwarding and restoration."""

from __future__ import annotations

import sys
import threading
from typing import Any, Callable

import pytest

from lib_failure_message.adapters.hooks.threading_hook import ThreadingHookInstaller, format_failure
from lib_failure_message.domain.errors import HookAlreadyInstalledError, HookNotInstalledError
from lib_failure_message.domain.relay import MessageRelay


def _run_thread(target: Callable[[], object], *, name: str | None = None) -> None:
    thread = threading.Thread(target=target, name=name)
    thread.start()
    thread.join()


def _boom() -> None:
    raise ValueError("boom")


def test_install_and_uninstall_restore_the_same_hook_object() -> None:
    original = threading.excepthook
    installer = ThreadingHookInstaller()
    installer.install(MessageRelay())
    assert installer.is_installed
    assert threading.excepthook is not original
    installer.uninstall()
    assert not installer.is_installed
    assert threading.excepthook is original


def test_installed_context_restores_hook_when_block_raises() -> None:
    original = threading.excepthook
    with pytest.raises(KeyError):
        with ThreadingHookInstaller().installed(MessageRelay()):
            raise KeyError("inside")
    assert threading.excepthook is original


def test_double_install_is_rejected() -> None:
    installer = ThreadingHookInstaller()
    with installer.installed(MessageRelay()):
        with pytest.raises(HookAlreadyInstalledError):
            installer.install(MessageRelay())


def test_uninstall_without_install_is_rejected() -> None:
    with pytest.raises(HookNotInstalledError):
        ThreadingHookInstaller().uninstall()


def test_failure_is_published_into_relay() -> None:
    relay = MessageRelay()
    with ThreadingHookInstaller(include_location=False).installed(relay):
        _run_thread(_boom)
    assert relay.is_ready
    assert relay.consume() == "ValueError: boom"


def test_location_line_names_the_raising_frame() -> None:
    relay = MessageRelay()
    with ThreadingHookInstaller().installed(relay):
        _run_thread(_boom)
    header, body = relay.consume().split("\n", 1)
    assert header.startswith("raised at ")
    assert header.endswith(":")
    assert "test_threading_hook.py:" in header
    assert body == "ValueError: boom"


def test_unaccepted_thread_is_forwarded_to_previous_hook() -> None:
    seen: list[Any] = []
    original = threading.excepthook
    threading.excepthook = seen.append
    try:
        relay = MessageRelay()
        installer = ThreadingHookInstaller(accepts=lambda thread: thread.name == "captured")
        with installer.installed(relay):
            _run_thread(_boom, name="bystander")
    finally:
        threading.excepthook = original
    assert not relay.is_ready
    assert len(seen) == 1
    assert seen[0].exc_type is ValueError
    assert seen[0].thread.name == "bystander"


def test_accepted_thread_is_captured_with_predicate() -> None:
    relay = MessageRelay()
    installer = ThreadingHookInstaller(accepts=lambda thread: thread.name == "captured", include_location=False)
    with installer.installed(relay):
        _run_thread(_boom, name="captured")
    assert relay.consume() == "ValueError: boom"


def test_system_exit_is_captured() -> None:
    def _exit() -> None:
        raise SystemExit(3)

    relay = MessageRelay()
    with ThreadingHookInstaller(include_location=False).installed(relay):
        _run_thread(_exit)
    assert relay.consume() == "SystemExit: 3"


def test_format_failure_keeps_multiline_message_verbatim() -> None:
    message = "first line\nsecond line\n"
    text = format_failure(RuntimeError, RuntimeError(message), None)
    assert text == f"RuntimeError: {message}"


@pytest.mark.skipif(sys.version_info < (3, 11), reason="exception notes need Python 3.11")
def test_format_failure_appends_notes() -> None:
    error = RuntimeError("boom")
    error.__notes__ = ["while loading fixtures"]
    text = format_failure(RuntimeError, error, None)
    assert text == "RuntimeError: boom\nwhile loading fixtures"


def test_format_failure_without_message() -> None:
    assert format_failure(RuntimeError, RuntimeError(), None) == "RuntimeError"


def test_format_failure_qualifies_non_builtin_types() -> None:
    text = format_failure(HookNotInstalledError, HookNotInstalledError("x"), None)
    assert text == "lib_failure_message.domain.errors.HookNotInstalledError: x"


def test_unset_hook_is_saved_and_restored_exactly() -> None:
    original = threading.excepthook
    threading.excepthook = None
    try:
        installer = ThreadingHookInstaller()
        installer.install(MessageRelay())
        assert installer.is_installed
        installer.uninstall()
        restored = threading.excepthook
    finally:
        threading.excepthook = original
    assert restored is None
    assert not installer.is_installed


def test_unset_hook_forwards_to_interpreter_default(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[Any] = []
    monkeypatch.setattr(threading, "__excepthook__", seen.append)
    original = threading.excepthook
    threading.excepthook = None
    try:
        with ThreadingHookInstaller(accepts=lambda thread: False).installed(MessageRelay()):
            _run_thread(_boom)
    finally:
        threading.excepthook = original
    assert [args.exc_type for args in seen] == [ValueError]
