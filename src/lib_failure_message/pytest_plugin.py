"""pytest integration registered through the ``pytest11`` entry point.

Provides the ``assert_failure_message`` fixture so test modules can request the
assertion instead of importing it.
"""

from __future__ import annotations

from typing import Callable

import pytest

from .core import assert_failure_message as _assert_failure_message


@pytest.fixture()
def assert_failure_message() -> Callable[[Callable[[], object], str], None]:
    """Return :func:`lib_failure_message.assert_failure_message`."""

    return _assert_failure_message
