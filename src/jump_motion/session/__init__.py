"""Jump session core: controller, session record, competing-mode guard."""

from .controller import ActivationController
from .mode_guard import (
    AbsentModeGuard,
    ModeGuard,
    PresentModeGuard,
    resolve_mode_guard,
)
from .state import Session, SessionEnd

__all__ = [
    "AbsentModeGuard",
    "ActivationController",
    "ModeGuard",
    "PresentModeGuard",
    "Session",
    "SessionEnd",
    "resolve_mode_guard",
]
