"""Process-wide access point for the jump controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from jump_motion.errors import JumpMotionError
from jump_motion.runtime import telemetry
from jump_motion.session.controller import ActivationController


@dataclass
class JumpHost:
    """Owns the controller for one host process and backs its trigger command."""

    controller: ActivationController

    def trigger(self) -> bool:
        """Start (or restart) a session; failures are logged, never raised."""

        try:
            started = self.controller.activate()
        except JumpMotionError as exc:
            telemetry.record_event(
                "host.trigger_failed",
                level="warning",
                data={"error": type(exc).__name__, "message": str(exc)},
            )
            return False
        if not started:
            telemetry.record_event(
                "host.trigger_failed", level="warning", data={"error": "ignored"}
            )
        return started

    def shutdown(self) -> None:
        self.controller.deactivate(reason="shutdown")


_HOST: Optional[JumpHost] = None


def install_host(controller: ActivationController) -> JumpHost:
    """Install ``controller`` as the process-wide one, replacing any previous."""

    global _HOST
    if _HOST is not None and _HOST.controller is not controller:
        _HOST.shutdown()
    _HOST = JumpHost(controller)
    telemetry.record_event("host.install", level="debug")
    return _HOST


def get_host() -> JumpHost:
    if _HOST is None:
        raise RuntimeError("No jump host installed; call install_host() first")
    return _HOST


def shutdown_host() -> None:
    global _HOST
    if _HOST is None:
        return
    host, _HOST = _HOST, None
    host.shutdown()


__all__ = ["JumpHost", "get_host", "install_host", "shutdown_host"]
