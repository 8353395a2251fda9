"""Single-assignment message slot handed across the interception boundary.

Purpose
-------
Carry one captured failure message from the interception hook (running on the
capture thread, inside the interpreter's exception handling) to the caller
waiting on the orchestrator thread.

Contents
--------
* :class:`MessageRelay` – one-shot slot with ``publish`` / ``await_ready`` /
  ``consume``.

System Role
-----------
The relay's lock is the only synchronisation between producer and consumer.
``publish`` stores the payload and raises the readiness flag inside one
critical section; ``await_ready`` reads the flag inside the same lock. Lock
release/acquire gives the pairing that makes a set flag imply a visible
payload, independent of interpreter details such as the GIL.
"""

from __future__ import annotations

import threading

from .errors import RelayAlreadyPublishedError, RelayConsumedError, RelayNotReadyError
from .spin import spin_until


class MessageRelay:
    """One-shot, single-producer/single-consumer message slot.

    The payload is written at most once and moved out at most once. Misuse
    raises an :class:`~lib_failure_message.domain.errors.InterceptionProtocolError`
    subclass instead of returning stale or empty data.

    Examples
    --------
    >>> relay = MessageRelay()
    >>> relay.is_ready
    False
    >>> relay.publish("boom")
    >>> relay.await_ready()
    >>> relay.consume()
    'boom'
    >>> relay.consume()
    Traceback (most recent call last):
    ...
    lib_failure_message.domain.errors.RelayConsumedError: relay message was already consumed
    """

    __slots__ = ("_lock", "_message", "_ready", "_consumed")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._message: str | None = None
        self._ready = False
        self._consumed = False

    @property
    def is_ready(self) -> bool:
        """``True`` once a message has been published."""

        with self._lock:
            return self._ready

    @property
    def is_consumed(self) -> bool:
        """``True`` once the message has been moved out."""

        with self._lock:
            return self._consumed

    def publish(self, message: str) -> None:
        """Store *message* and mark the relay ready.

        Called synchronously by the interception hook on the failing thread.

        Raises
        ------
        RelayAlreadyPublishedError
            When a message was already published.
        """

        with self._lock:
            if self._ready:
                raise RelayAlreadyPublishedError("relay accepts a single message")
            self._message = message
            self._ready = True

    def await_ready(self, *, yield_interpreter: bool = True) -> None:
        """Spin until a message has been published.

        Only call this once the producer is known to publish, otherwise the
        wait never ends.
        """

        spin_until(lambda: self.is_ready, yield_interpreter=yield_interpreter)

    def consume(self) -> str:
        """Move the message out of the relay, leaving it empty.

        Raises
        ------
        RelayNotReadyError
            Nothing was published yet.
        RelayConsumedError
            The message was already consumed.
        """

        with self._lock:
            if self._consumed:
                raise RelayConsumedError("relay message was already consumed")
            if not self._ready or self._message is None:
                raise RelayNotReadyError("relay has no published message")
            message, self._message = self._message, None
            self._consumed = True
            return message

    def __repr__(self) -> str:
        return f"MessageRelay(ready={self._ready}, consumed={self._consumed})"
