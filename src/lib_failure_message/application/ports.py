"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the composition root relies on so the capture
use case stays independent of the concrete interception mechanism.

Contents
--------
* :class:`HookInstaller` – installs and removes the process-wide interceptor.
* :class:`EnvLoader` – materialises prefixed process environment variables.

System Role
-----------
These protocols enforce Dependency Inversion: the orchestrator asks for
behaviour through abstractions and the adapters package supplies it.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Mapping, Protocol, runtime_checkable

from ..domain.relay import MessageRelay


@runtime_checkable
class HookInstaller(Protocol):
    """Install the failure interceptor that publishes into a relay.

    Why
    ----
    The interpreter offers exactly one process-wide slot for the interceptor.
    Hiding it behind this port keeps the slot's save/restore discipline in one
    adapter.
    """

    @property
    def is_installed(self) -> bool:
        """``True`` while the interceptor occupies the process-wide slot."""

    def install(self, relay: MessageRelay) -> None:
        """Install the interceptor bound to *relay*, remembering the previous hook."""

    def uninstall(self) -> None:
        """Restore the hook that was active before :meth:`install`."""

    def installed(self, relay: MessageRelay) -> AbstractContextManager[None]:
        """Pair :meth:`install` with a guaranteed :meth:`uninstall`."""


@runtime_checkable
class EnvLoader(Protocol):
    """Translate process environment variables into a flat settings mapping."""

    def load(self, prefix: str) -> Mapping[str, object]:
        """Return variables that match *prefix*, keyed by lowercase suffix."""
