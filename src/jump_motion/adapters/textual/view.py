"""In-memory editor view driven by the Textual demo."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from jump_motion.host.capture import KeyFilter
from jump_motion.host.view import Position


class TextualEditorView:
    """Lines, a caret and a scroll window, plus a key filter chain.

    Keys go through installed filters front-most first; unfiltered keys get
    basic caret movement. Keys sent back with ``send_key`` take the same path.
    """

    MOVES = {
        "left": (0, -1),
        "right": (0, 1),
        "up": (-1, 0),
        "down": (1, 0),
    }

    def __init__(
        self,
        lines: Sequence[str] = ("",),
        *,
        name: str = "textual",
        height: int = 40,
    ) -> None:
        self.name = name
        self.lines: List[str] = list(lines) or [""]
        self.caret: Position = (0, 0)
        self.first_row = 0
        self.height = max(1, height)
        self.sent_keys: List[str] = []
        self._filters: List[KeyFilter] = []

    @classmethod
    def from_text(
        cls, text: str, *, name: str = "textual", height: int = 40
    ) -> "TextualEditorView":
        return cls(text.splitlines() or [""], name=name, height=height)

    @property
    def has_key_filters(self) -> bool:
        return bool(self._filters)

    def visible_lines(self) -> Tuple[int, Sequence[str]]:
        last = self.first_row + self.height
        return self.first_row, tuple(self.lines[self.first_row : last])

    def resize(self, height: int) -> None:
        self.height = max(1, height)
        self._scroll_to_caret()

    def move_caret(self, position: Position) -> None:
        row = min(max(position[0], 0), len(self.lines) - 1)
        col = min(max(position[1], 0), len(self.lines[row]))
        self.caret = (row, col)
        self._scroll_to_caret()

    def send_key(self, key: str) -> None:
        self.sent_keys.append(key)
        self.dispatch_key(key, None)

    def add_key_filter(self, key_filter: KeyFilter) -> None:
        self._filters.append(key_filter)

    def remove_key_filter(self, key_filter: KeyFilter) -> None:
        try:
            self._filters.remove(key_filter)
        except ValueError:
            pass

    def dispatch_key(self, key: str, text: Optional[str]) -> bool:
        for key_filter in reversed(list(self._filters)):
            if key_filter(key, text):
                return True
        return self._default_key(key)

    def _default_key(self, key: str) -> bool:
        delta = self.MOVES.get(key)
        if delta is None:
            return False
        row, col = self.caret
        self.move_caret((row + delta[0], col + delta[1]))
        return True

    def _scroll_to_caret(self) -> None:
        row = self.caret[0]
        if row < self.first_row:
            self.first_row = row
        elif row >= self.first_row + self.height:
            self.first_row = row - self.height + 1


__all__ = ["TextualEditorView"]
