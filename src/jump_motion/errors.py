"""Exception taxonomy shared by the session core and host glue."""

from __future__ import annotations


class JumpMotionError(RuntimeError):
    """Base class for every error raised by jump_motion."""


class NoActiveViewError(JumpMotionError):
    """Raised by ``activate`` when the host has no focused editor view."""

    def __init__(self, message: str = "No active editor view to jump in") -> None:
        super().__init__(message)


class OverlayConstructionError(JumpMotionError):
    """The label overlay collaborator could not be built for a view."""

    def __init__(self, view_name: str) -> None:
        super().__init__(f"Could not build jump labels for view '{view_name}'")
        self.view_name = view_name


class CaptureInstallError(JumpMotionError):
    """Input capture could not be installed on a view."""

    def __init__(self, view_name: str) -> None:
        super().__init__(f"Could not capture input for view '{view_name}'")
        self.view_name = view_name


class CollaboratorProbeFailure(JumpMotionError):
    """A host command probe or invocation failed."""

    def __init__(self, command: str, operation: str) -> None:
        super().__init__(f"Host command '{command}' failed during {operation}")
        self.command = command
        self.operation = operation


__all__ = [
    "CaptureInstallError",
    "CollaboratorProbeFailure",
    "JumpMotionError",
    "NoActiveViewError",
    "OverlayConstructionError",
]
