"""Suspends a competing modal-input extension for the length of a session."""

from __future__ import annotations

from typing import Optional

from jump_motion.errors import CollaboratorProbeFailure
from jump_motion.host.commands import CommandExecutor
from jump_motion.runtime import telemetry
from jump_motion.runtime.config import JumpConfig


class ModeGuard:
    """Base guard; the competing extension is toggled off, then back on."""

    present: bool = False

    @property
    def suspended(self) -> bool:
        return False

    def suspend(self) -> bool:
        return False

    def resume(self) -> bool:
        return False


class AbsentModeGuard(ModeGuard):
    """No command surface to talk to; both operations are no-ops."""


class PresentModeGuard(ModeGuard):
    """Guard backed by the host's named commands.

    ``suspend`` runs the disable command when the host lists it; ``resume``
    does the same with the enable command. Each runs at most once per guard.
    Host failures are logged and reported as ``False``.
    """

    present = True

    def __init__(
        self,
        executor: CommandExecutor,
        *,
        disable_command: str,
        enable_command: str,
        logger_name: Optional[str] = None,
    ) -> None:
        self.executor = executor
        self.disable_command = disable_command
        self.enable_command = enable_command
        self._logger_name = logger_name
        self._suspended = False
        self._resumed = False

    @property
    def suspended(self) -> bool:
        return self._suspended

    def suspend(self) -> bool:
        if self._suspended:
            return True
        self._suspended = self._run(self.disable_command, "suspend")
        return self._suspended

    def resume(self) -> bool:
        if self._resumed:
            return False
        self._resumed = True
        self._suspended = False
        return self._run(self.enable_command, "resume")

    def _run(self, command: str, phase: str) -> bool:
        try:
            if not self.executor.is_command_available(command):
                telemetry.record_event(
                    f"mode_guard.{phase}_skipped",
                    level="debug",
                    data={"command": command},
                    logger_name=self._logger_name,
                )
                return False
            self.executor.execute(command)
        except CollaboratorProbeFailure as exc:
            telemetry.record_event(
                "mode_guard.probe_failed",
                level="warning",
                data={
                    "command": exc.command,
                    "operation": exc.operation,
                    "phase": phase,
                    "cause": repr(exc.__cause__),
                },
                logger_name=self._logger_name,
            )
            return False

        telemetry.record_event(
            f"mode_guard.{phase}",
            data={"command": command},
            logger_name=self._logger_name,
        )
        return True


def resolve_mode_guard(
    executor: Optional[CommandExecutor],
    config: JumpConfig,
    *,
    logger_name: Optional[str] = None,
) -> ModeGuard:
    """Pick the guard variant for a new session."""

    if executor is None:
        return AbsentModeGuard()
    return PresentModeGuard(
        executor,
        disable_command=config.disable_command,
        enable_command=config.enable_command,
        logger_name=logger_name,
    )


__all__ = [
    "AbsentModeGuard",
    "ModeGuard",
    "PresentModeGuard",
    "resolve_mode_guard",
]
