"""Runtime settings value object.

Purpose
-------
Hold the few knobs that influence how the interception protocol behaves. The
object is immutable and contains no I/O; the environment adapter builds it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable runtime settings.

    Attributes
    ----------
    spin_yield:
        When ``True`` spin-waits release the GIL on every miss
        (``time.sleep(0)``). When ``False`` they spin without yielding.
    include_location:
        When ``True`` the captured text starts with a ``raised at file:line:``
        line naming the innermost traceback frame.

    Examples
    --------
    >>> Settings()
    Settings(spin_yield=True, include_location=True)
    """

    spin_yield: bool = True
    include_location: bool = True


DEFAULT_SETTINGS = Settings()
