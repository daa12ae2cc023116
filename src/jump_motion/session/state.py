"""The record owned by the controller while a jump session is live."""

from __future__ import annotations

from dataclasses import dataclass

from jump_motion.host.capture import CaptureHandle
from jump_motion.host.events import Subscription
from jump_motion.host.view import EditorView
from jump_motion.labels.overlay import LabelOverlay

from .mode_guard import ModeGuard


@dataclass(slots=True)
class Session:
    """One activation, from ``activate`` to its terminating teardown.

    ``overlay``, ``capture`` and ``subscription`` are acquired together and
    released together; ``code_buffer`` only grows while they are held.
    """

    id: int
    view: EditorView
    overlay: LabelOverlay
    capture: CaptureHandle
    subscription: Subscription[str]
    guard: ModeGuard
    code_buffer: str = ""

    def append(self, char: str) -> str:
        self.code_buffer += char
        return self.code_buffer


@dataclass(frozen=True, slots=True)
class SessionEnd:
    """Payload of ``ActivationController.session_ended``."""

    session_id: int
    view_name: str
    reason: str
    code: str
    failed_steps: tuple[str, ...] = ()


__all__ = ["Session", "SessionEnd"]
