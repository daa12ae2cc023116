"""Exclusive character capture for one editor view."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from jump_motion.runtime import telemetry
from jump_motion.runtime.config import NON_CHARACTER

from .events import EventChannel
from .view import EditorView

KeyFilter = Callable[[str, Optional[str]], bool]


class CaptureHandle(Protocol):
    """Installed interception of key characters for a view."""

    character_produced: EventChannel[str]

    @property
    def installed(self) -> bool:
        ...

    def remove(self) -> None:
        ...


class CaptureFactory(Protocol):
    def __call__(self, view: EditorView) -> CaptureHandle:
        ...


class KeyFilterHost(Protocol):
    """Views that let a filter see key events before normal handling."""

    name: str

    def add_key_filter(self, key_filter: KeyFilter) -> None:
        ...

    def remove_key_filter(self, key_filter: KeyFilter) -> None:
        ...


class KeyFilterCapture:
    """Capture implemented as the front-most key filter of a view.

    While installed every key is swallowed. Single printable characters are
    forwarded on ``character_produced``; anything else (control keys,
    navigation keys, focus loss) is forwarded as the non-character sentinel.
    """

    def __init__(self, host: KeyFilterHost, *, non_character: str = NON_CHARACTER):
        self.host = host
        self.non_character = non_character
        self.character_produced: EventChannel[str] = EventChannel()
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self) -> "KeyFilterCapture":
        if self._installed:
            return self
        self.host.add_key_filter(self.filter_key)
        self._installed = True
        telemetry.record_event(
            "capture.install", level="debug", data={"view": self.host.name}
        )
        return self

    def remove(self) -> None:
        if not self._installed:
            return
        self._installed = False
        self.host.remove_key_filter(self.filter_key)
        telemetry.record_event(
            "capture.remove", level="debug", data={"view": self.host.name}
        )

    def filter_key(self, key: str, text: Optional[str]) -> bool:
        if not self._installed:
            return False
        if text is not None and len(text) == 1 and text.isprintable():
            self.character_produced.emit(text)
        else:
            self.character_produced.emit(self.non_character)
        return True

    def focus_lost(self) -> None:
        if self._installed:
            self.character_produced.emit(self.non_character)


def install_key_filter(view: EditorView) -> KeyFilterCapture:
    """``CaptureFactory`` for views implementing ``KeyFilterHost``."""

    add = getattr(view, "add_key_filter", None)
    if add is None or not hasattr(view, "remove_key_filter"):
        raise TypeError(f"View '{view.name}' does not accept key filters")
    return KeyFilterCapture(view).install()  # type: ignore[arg-type]


__all__ = [
    "CaptureFactory",
    "CaptureHandle",
    "KeyFilter",
    "KeyFilterCapture",
    "KeyFilterHost",
    "install_key_filter",
]
