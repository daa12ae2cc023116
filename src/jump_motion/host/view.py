"""Protocols describing the editor surfaces a jump session talks to."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, Tuple

Position = Tuple[int, int]  # (row, column)


class EditorView(Protocol):
    """The slice of a host text view the session needs."""

    name: str
    caret: Position

    def visible_lines(self) -> Tuple[int, Sequence[str]]:
        """Return the first visible row and the visible lines."""
        ...

    def move_caret(self, position: Position) -> None:
        ...

    def send_key(self, key: str) -> None:
        """Push a synthetic key through the host's normal input pipeline."""
        ...


class ViewResolver(Protocol):
    def active_view(self) -> Optional[EditorView]:
        ...


class TextStructureSelector(Protocol):
    """Hands overlay factories whatever text-structure service the host has."""

    def __call__(self, view: EditorView) -> object:
        ...


class FixedViewResolver:
    """Resolver for hosts with a single view (or none yet)."""

    def __init__(self, view: Optional[EditorView] = None) -> None:
        self.view = view

    def active_view(self) -> Optional[EditorView]:
        return self.view


def no_text_structure(view: EditorView) -> object:
    del view
    return None


__all__ = [
    "EditorView",
    "FixedViewResolver",
    "Position",
    "TextStructureSelector",
    "ViewResolver",
    "no_text_structure",
]
