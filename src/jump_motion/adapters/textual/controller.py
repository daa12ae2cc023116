"""Textual adapter wiring key events into the jump controller."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Optional, Sequence

from jump_motion.host.capture import install_key_filter
from jump_motion.host.commands import CommandExecutor
from jump_motion.host.view import FixedViewResolver
from jump_motion.labels import (
    LabelAssignment,
    trie_overlay_factory,
    word_start_assignments,
)
from jump_motion.runtime.config import JumpConfig
from jump_motion.runtime.host import JumpHost
from jump_motion.session import ActivationController, Session, SessionEnd

from .view import TextualEditorView

FOCUS_LOST = "focus_lost"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to update Textual widgets."""

    refresh_view: Callable[[TextualEditorView], None]
    update_status: Callable[[str], None] = _noop
    show_labels: Callable[[Sequence[LabelAssignment]], None] = _noop
    log: Callable[[str], None] = _noop


class TextualJumpAdapter:
    """Routes Textual keys to the trigger, the capture, or the view."""

    def __init__(
        self,
        view: TextualEditorView,
        hooks: TextualUIHooks,
        *,
        config: Optional[JumpConfig] = None,
        commands: Optional[CommandExecutor] = None,
    ) -> None:
        self.view = view
        self.hooks = hooks
        self.config = config or JumpConfig()
        overlay_factory = trie_overlay_factory(
            partial(word_start_assignments, alphabet=self.config.label_alphabet),
            on_render=self._render_labels,
            on_clear=self._clear_labels,
        )
        self.controller = ActivationController(
            views=FixedViewResolver(view),
            overlay_factory=overlay_factory,
            capture_factory=install_key_filter,
            commands=commands,
            config=self.config,
            logger_name="jump_motion.adapters.textual",
        )
        self.host = JumpHost(self.controller)
        self.controller.session_started.subscribe(self._on_session_started)
        self.controller.session_ended.subscribe(self._on_session_ended)
        self.hooks.refresh_view(self.view)

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> bool:
        """Dispatch one key; returns whether anything consumed it."""

        self._log_state("key ->", key=key, text=text)
        if key == self.config.trigger_key:
            consumed = self.host.trigger()
            if not consumed:
                self.hooks.update_status("jump unavailable")
        else:
            consumed = self.view.dispatch_key(key, text)
            if self.controller.is_active:
                self.hooks.update_status(f"jump: {self.controller.code_buffer}")
        self.hooks.refresh_view(self.view)
        self._log_state("result <-", consumed=consumed)
        return consumed

    def handle_focus_lost(self) -> None:
        if self.view.has_key_filters:
            self.view.dispatch_key(FOCUS_LOST, None)
            self.hooks.refresh_view(self.view)

    def shutdown(self) -> None:
        self.host.shutdown()

    def _render_labels(self, assignments: Sequence[LabelAssignment]) -> None:
        self.hooks.show_labels(tuple(assignments))

    def _clear_labels(self) -> None:
        self.hooks.show_labels(())

    def _on_session_started(self, session: Session) -> None:
        self.hooks.update_status("jump: type a label")
        self._log_state("session ->", session=session.id)

    def _on_session_ended(self, end: SessionEnd) -> None:
        self.hooks.update_status(f"jump {end.reason}")
        self._log_state("session <-", session=end.session_id, reason=end.reason)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "view": self.view.name,
            "caret": self.view.caret,
            "active": self.controller.is_active,
            "code": self.controller.code_buffer,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["FOCUS_LOST", "TextualJumpAdapter", "TextualUIHooks"]
