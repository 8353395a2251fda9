"""Testing diagnostics that keep failure scenarios observable and predictable.

Purpose
    Provide reference failure texts and an intentionally failing helper that
    exercise the assertion and the CLI without brittle fixtures.

Contents
    - ``REFERENCE_MESSAGE``: multi-line text (Unicode, escapes, markup) that is
      awkward to embed in a regex-based expectation.
    - ``FAILURE_MESSAGE``: short message used when forcing a failure.
    - ``i_should_fail``: raises ``RuntimeError`` so callers can assert on the
      propagated error details.
    - ``raising``: builds a zero-argument callable raising ``RuntimeError``
      with a chosen message.
"""

from __future__ import annotations

from typing import Callable, Final

REFERENCE_MESSAGE: Final[str] = """Character: – U+2013
Name: EN DASH
General Character Properties
Block: General Punctuation
Unicode category: Punctuation, Dash
Various Useful Representations
UTF-8: 0xE2 0x80 0x93
UTF-16: 0x2013
C octal escaped UTF-8: \\342\\200\\223
XML decimal entity: &#8211;"""
"""Multi-line reference text containing characters that regexes would need escaped."""

FAILURE_MESSAGE: Final[str] = "i should fail"
"""Stable message emitted when ``i_should_fail`` triggers a failure sequence."""


def i_should_fail() -> None:
    """Raise a deterministic :class:`RuntimeError` for failure-path testing.

    Examples
    --------
    >>> i_should_fail()
    Traceback (most recent call last):
    ...
    RuntimeError: i should fail
    """

    raise RuntimeError(FAILURE_MESSAGE)


def raising(message: str) -> Callable[[], None]:
    """Return a callable that raises ``RuntimeError(message)`` when invoked.

    Examples
    --------
    >>> raising("disk full")()
    Traceback (most recent call last):
    ...
    RuntimeError: disk full
    """

    def _raise() -> None:
        raise RuntimeError(message)

    return _raise
