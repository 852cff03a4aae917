"""Shared bookkeeping for adapters: known peripherals and event broadcast."""

from __future__ import annotations

import asyncio
import logging
import threading
import weakref
from collections import deque
from typing import AsyncIterator, Dict, Generic, Hashable, List, Optional, TypeVar

from .api import CentralEvent, DeviceDisconnected, ValueNotification

_log = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P")


class SendError(Exception):
    """Raised when a value is sent while no receiver is subscribed."""

    def __init__(self, value) -> None:
        self.value = value
        super().__init__("no receivers subscribed")


class LaggedError(Exception):
    """The receiver fell behind and ``skipped`` values were dropped."""

    def __init__(self, skipped: int) -> None:
        self.skipped = skipped
        super().__init__(f"receiver lagged by {skipped} values")


class ChannelClosedError(Exception):
    """The channel is closed and no more values will arrive."""


class BroadcastReceiver(Generic[T]):
    """One subscriber of a :class:`BroadcastChannel`."""

    def __init__(self, capacity: int) -> None:
        self._queue: deque = deque()
        self._capacity = capacity
        self._lagged = 0
        self._closed = False
        self._wakeup = asyncio.Event()

    def _push(self, item: T) -> None:
        if len(self._queue) >= self._capacity:
            self._queue.popleft()
            self._lagged += 1
        self._queue.append(item)
        self._wakeup.set()

    def _close(self) -> None:
        self._closed = True
        self._wakeup.set()

    async def recv(self) -> T:
        """Wait for the next value.

        Raises LaggedError once if values were dropped, ChannelClosedError
        when the channel is closed and drained.
        """
        while True:
            if self._lagged:
                skipped, self._lagged = self._lagged, 0
                raise LaggedError(skipped)
            if self._queue:
                return self._queue.popleft()
            if self._closed:
                raise ChannelClosedError()
            self._wakeup.clear()
            await self._wakeup.wait()


class BroadcastChannel(Generic[T]):
    """A bounded multi-subscriber channel; slow receivers lose old values."""

    def __init__(self, capacity: int = 16) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._receivers: "weakref.WeakSet[BroadcastReceiver[T]]" = weakref.WeakSet()
        self._closed = False

    def send(self, item: T) -> int:
        """Deliver ``item`` to all receivers and return how many there are."""
        receivers = list(self._receivers)
        if self._closed or not receivers:
            raise SendError(item)
        for receiver in receivers:
            receiver._push(item)
        return len(receivers)

    def subscribe(self) -> BroadcastReceiver[T]:
        """A new receiver that sees every value sent from now on."""
        receiver: BroadcastReceiver[T] = BroadcastReceiver(self._capacity)
        if self._closed:
            receiver._close()
        else:
            self._receivers.add(receiver)
        return receiver

    def close(self) -> None:
        """Close the channel; receivers end after draining what they hold."""
        self._closed = True
        for receiver in list(self._receivers):
            receiver._close()


async def _receiver_stream(receiver: BroadcastReceiver[T]) -> AsyncIterator[T]:
    while True:
        try:
            yield await receiver.recv()
        except LaggedError:
            continue
        except ChannelClosedError:
            return


def notifications_stream(
    receiver: BroadcastReceiver[ValueNotification],
) -> AsyncIterator[ValueNotification]:
    """Stream the values of ``receiver``, skipping over lag, until closed."""
    return _receiver_stream(receiver)


class AdapterManager(Generic[P]):
    """Tracks an adapter's peripherals and broadcasts its events."""

    def __init__(self, capacity: int = 16) -> None:
        self._peripherals: Dict[Hashable, P] = {}
        self._lock = threading.Lock()
        self._events: BroadcastChannel[CentralEvent] = BroadcastChannel(capacity)

    def emit(self, event: CentralEvent) -> None:
        """Broadcast ``event``; a disconnect also forgets the peripheral."""
        if isinstance(event, DeviceDisconnected):
            with self._lock:
                self._peripherals.pop(event.id, None)
        try:
            self._events.send(event)
        except SendError as lost:
            _log.debug("Lost central event, while nothing subscribed: %r", lost.value)

    def event_stream(self) -> AsyncIterator[CentralEvent]:
        """A stream of every event emitted from now on."""
        return _receiver_stream(self._events.subscribe())

    def add_peripheral(self, peripheral: P) -> None:
        """Register a new peripheral; its id must not be known yet."""
        key = peripheral.id()
        with self._lock:
            if key in self._peripherals:
                raise ValueError("Adding a peripheral that's already in the map.")
            self._peripherals[key] = peripheral

    def peripherals(self) -> List[P]:
        """All known peripherals."""
        with self._lock:
            return list(self._peripherals.values())

    def peripheral(self, peripheral_id: Hashable) -> Optional[P]:
        """The peripheral with ``peripheral_id``, or None."""
        with self._lock:
            return self._peripherals.get(peripheral_id)