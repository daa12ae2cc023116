"""Callback registration with disposable subscription tokens."""

from __future__ import annotations

from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")


class Subscription(Generic[T]):
    """Token returned from ``EventChannel.subscribe``; ``dispose`` detaches it."""

    def __init__(self, channel: "EventChannel[T]", callback: Callable[[T], None]):
        self._channel = channel
        self._callback = callback
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._channel._detach(self._callback)


class EventChannel(Generic[T]):
    """Single-event fan-out used by capture handles."""

    def __init__(self) -> None:
        self._callbacks: List[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Subscription[T]:
        self._callbacks.append(callback)
        return Subscription(self, callback)

    def emit(self, payload: T) -> None:
        # Callbacks may dispose their own subscription mid-dispatch.
        for callback in list(self._callbacks):
            callback(payload)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def _detach(self, callback: Callable[[T], None]) -> None:
        try:
            self._callbacks.remove(callback)
        except ValueError:
            pass


__all__ = ["EventChannel", "Subscription"]
