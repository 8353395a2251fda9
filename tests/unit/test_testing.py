from __future__ import annotations

import pytest

from lib_failure_message.testing import FAILURE_MESSAGE, REFERENCE_MESSAGE, i_should_fail, raising


def test_i_should_fail_raises_runtime_error() -> None:
    with pytest.raises(RuntimeError, match="^i should fail$"):
        i_should_fail()


def test_i_should_fail_reexported() -> None:
    from lib_failure_message import i_should_fail as exported
    from lib_failure_message.testing import i_should_fail as original

    assert exported is original


def test_reference_message_carries_awkward_text() -> None:
    lines = REFERENCE_MESSAGE.splitlines()
    assert len(lines) == 10
    assert lines[0] == "Character: – U+2013"
    assert "\\342\\200\\223" in REFERENCE_MESSAGE
    assert FAILURE_MESSAGE == "i should fail"


def test_raising_builds_a_failing_callable() -> None:
    callback = raising("disk full")
    with pytest.raises(RuntimeError, match="^disk full$"):
        callback()
