"""Textual host adapter for jump_motion."""

from .controller import FOCUS_LOST, TextualJumpAdapter, TextualUIHooks
from .view import TextualEditorView

__all__ = ["FOCUS_LOST", "TextualEditorView", "TextualJumpAdapter", "TextualUIHooks"]
