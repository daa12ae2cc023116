"""Activation controller: owns the jump session and its key-matching loop."""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from jump_motion.errors import (
    CaptureInstallError,
    NoActiveViewError,
    OverlayConstructionError,
)
from jump_motion.host.capture import CaptureFactory, install_key_filter
from jump_motion.host.commands import CommandExecutor
from jump_motion.host.events import EventChannel
from jump_motion.host.view import (
    TextStructureSelector,
    ViewResolver,
    no_text_structure,
)
from jump_motion.labels.overlay import PENDING, MatchResult, OverlayFactory
from jump_motion.runtime import telemetry
from jump_motion.runtime.config import JumpConfig

from .mode_guard import resolve_mode_guard
from .state import Session, SessionEnd

DEFAULT_LOGGER = "jump_motion.session"


class ActivationController:
    """Runs at most one jump session at a time.

    ``activate`` restarts any live session, suspends the competing input mode,
    builds the label overlay and installs input capture on the active view.
    Each captured character narrows the typed code until the overlay reports
    a navigation or runs out of candidates; either ends the session, as does
    the non-character sentinel. Teardown attempts every release step no
    matter which ones fail.
    """

    def __init__(
        self,
        *,
        views: ViewResolver,
        overlay_factory: OverlayFactory,
        capture_factory: CaptureFactory = install_key_filter,
        commands: Optional[CommandExecutor] = None,
        text_structure: TextStructureSelector = no_text_structure,
        config: Optional[JumpConfig] = None,
        logger_name: str = DEFAULT_LOGGER,
    ) -> None:
        self.views = views
        self.overlay_factory = overlay_factory
        self.capture_factory = capture_factory
        self.commands = commands
        self.text_structure = text_structure
        self.config = config or JumpConfig()
        self.logger = telemetry.get_logger(logger_name)
        self._logger_name = logger_name
        self._session: Optional[Session] = None
        self._tearing_down = False
        self._counter = 0
        self.session_started: EventChannel[Session] = EventChannel()
        self.session_ended: EventChannel[SessionEnd] = EventChannel()

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def code_buffer(self) -> Optional[str]:
        if self._session is None:
            return None
        return self._session.code_buffer

    def activate(self) -> bool:
        """Start a session; ``False`` when ignored during teardown."""

        if self._tearing_down:
            self._event("session.activate_ignored", level="warning")
            return False

        view = self.views.active_view()
        if view is None:
            self._event("session.no_view", level="warning")
            raise NoActiveViewError()

        with telemetry.span(
            "session::activate",
            logger_name=self._logger_name,
            component="session",
            metadata={"view": view.name},
        ) as handle:
            if self._session is not None:
                handle.add_metadata("restart", self._session.id)
                self._end("restart")

            guard = resolve_mode_guard(
                self.commands, self.config, logger_name=self._logger_name
            )
            guard.suspend()
            handle.add_metadata("mode_suspended", guard.suspended)

            try:
                overlay = self.overlay_factory(view, self.text_structure(view))
            except Exception as exc:
                guard.resume()
                raise OverlayConstructionError(view.name) from exc

            try:
                capture = self.capture_factory(view)
            except Exception as exc:
                self._release_quietly(overlay.release, "release_overlay")
                guard.resume()
                raise CaptureInstallError(view.name) from exc

            try:
                subscription = capture.character_produced.subscribe(
                    self.on_character_produced
                )
            except Exception as exc:
                self._release_quietly(capture.remove, "remove_capture")
                self._release_quietly(overlay.release, "release_overlay")
                guard.resume()
                raise CaptureInstallError(view.name) from exc

            self._counter += 1
            session = Session(
                id=self._counter,
                view=view,
                overlay=overlay,
                capture=capture,
                subscription=subscription,
                guard=guard,
            )
            self._session = session
            handle.add_metadata("session", session.id)

        self._event(
            "session.start",
            data={"session": session.id, "view": view.name, "guard": guard.present},
        )
        self.session_started.emit(session)
        return True

    def on_character_produced(self, char: str) -> Optional[MatchResult]:
        """Feed one intercepted character; returns the overlay's reply.

        ``None`` means nothing was matched: the controller was idle, the
        sentinel cancelled the session, or the overlay failed.
        """

        session = self._session
        if session is None:
            self._event("session.stray_character", level="debug")
            return None

        if char == self.config.non_character:
            self._end("cancelled")
            return None

        code = session.append(char)
        try:
            with telemetry.span(
                "session::character",
                logger_name=self._logger_name,
                component="session",
                metadata={"session": session.id, "length": len(code)},
            ) as handle:
                result = session.overlay.try_match(code)
                handle.add_metadata("status", result.status)
        except Exception as exc:
            self._event(
                "session.match_failed",
                level="error",
                data={"session": session.id, "error": repr(exc)},
            )
            if self._session is session:
                self._end("match_failed")
            return None

        if result.status == PENDING:
            return result
        # Navigation may have re-triggered a session from a host callback.
        if self._session is session:
            self._end(result.status)
        return result

    def deactivate(self, *, reason: str = "deactivated") -> bool:
        """End the live session; ``False`` when there was none."""

        return self._end(reason)

    def _end(self, reason: str) -> bool:
        session = self._session
        if session is None or self._tearing_down:
            return False

        self._tearing_down = True
        self._session = None
        code = session.code_buffer
        try:
            with telemetry.span(
                "session::deactivate",
                logger_name=self._logger_name,
                component="session",
                metadata={"session": session.id, "reason": reason},
            ):
                failed = self._teardown(session)
        finally:
            self._tearing_down = False

        self._event(
            "session.end",
            level="warning" if failed else "info",
            data={
                "session": session.id,
                "reason": reason,
                "typed": len(code),
                "failed_steps": ",".join(failed),
            },
        )
        self.session_ended.emit(
            SessionEnd(
                session_id=session.id,
                view_name=session.view.name,
                reason=reason,
                code=code,
                failed_steps=tuple(failed),
            )
        )
        return True

    def _teardown(self, session: Session) -> List[str]:
        steps: Sequence[Tuple[str, Callable[[], object]]] = (
            ("unsubscribe", session.subscription.dispose),
            ("remove_capture", session.capture.remove),
            ("resume_mode", session.guard.resume),
            ("neutralize", partial(session.view.send_key, self.config.neutralize_key)),
            ("release_overlay", session.overlay.release),
        )
        failed: List[str] = []
        for step, action in steps:
            if not self._release_quietly(action, step, session_id=session.id):
                failed.append(step)
        session.code_buffer = ""
        return failed

    def _release_quietly(
        self,
        action: Callable[[], object],
        step: str,
        *,
        session_id: Optional[int] = None,
    ) -> bool:
        try:
            action()
        except Exception as exc:
            self._event(
                "session.teardown_failed",
                level="error",
                data={"session": session_id, "step": step, "error": repr(exc)},
            )
            return False
        return True

    def _event(
        self, name: str, *, level: str = "info", data: Optional[Dict[str, Any]] = None
    ) -> None:
        telemetry.record_event(
            name, level=level, data=data, logger_name=self._logger_name
        )


__all__ = ["ActivationController", "DEFAULT_LOGGER"]
