"""Access to the host's named-command surface."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Protocol

from jump_motion.errors import CollaboratorProbeFailure


class CommandSurface(Protocol):
    """Host object that lists and runs named commands."""

    def command_names(self) -> Iterable[str]:
        ...

    def execute_command(self, name: str) -> None:
        ...


class CommandExecutor:
    """Availability probe + execution over a ``CommandSurface``.

    Host failures are re-raised as ``CollaboratorProbeFailure`` so callers
    can tell them apart from their own bugs.
    """

    def __init__(self, surface: CommandSurface) -> None:
        self.surface = surface

    def is_command_available(self, name: str) -> bool:
        try:
            # Hosts enumerate lazily; stop at the first hit.
            return any(candidate == name for candidate in self.surface.command_names())
        except Exception as exc:
            raise CollaboratorProbeFailure(name, "probe") from exc

    def execute(self, name: str) -> None:
        try:
            self.surface.execute_command(name)
        except Exception as exc:
            raise CollaboratorProbeFailure(name, "invoke") from exc


class StaticCommandSurface:
    """In-memory command table for embedding hosts and tests."""

    def __init__(self) -> None:
        self._commands: Dict[str, Callable[[], object]] = {}

    def register(self, name: str, handler: Callable[[], object]) -> None:
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._commands[name] = handler

    def unregister(self, name: str) -> None:
        self._commands.pop(name, None)

    def command_names(self) -> Iterable[str]:
        return tuple(self._commands)

    def execute_command(self, name: str) -> None:
        try:
            handler = self._commands[name]
        except KeyError as exc:
            raise KeyError(f"Command '{name}' is not registered") from exc
        handler()


__all__ = ["CommandExecutor", "CommandSurface", "StaticCommandSurface"]
