"""Shared fixtures keeping process-wide state predictable between tests.

Every test starts without ``LIB_FAILURE_MESSAGE_*`` variables.
"""

from __future__ import annotations

import os

import pytest

ENV_PREFIX = "LIB_FAILURE_MESSAGE_"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop package settings inherited from the developer's shell."""

    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)

