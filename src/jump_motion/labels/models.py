"""Jump targets and the label codes assigned to them."""

from __future__ import annotations

from dataclasses import dataclass

from jump_motion.host.view import Position


@dataclass(frozen=True, slots=True)
class JumpTarget:
    """A caret position a label can send the user to."""

    position: Position
    text: str = ""

    def __post_init__(self) -> None:
        row, col = self.position
        if row < 0 or col < 0:
            raise ValueError(f"Invalid target position {self.position!r}")

    @property
    def row(self) -> int:
        return self.position[0]

    @property
    def column(self) -> int:
        return self.position[1]


@dataclass(frozen=True, slots=True)
class LabelAssignment:
    """Label code overlaid on one target."""

    code: str
    target: JumpTarget

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("label code cannot be empty")
        if not self.code.isprintable():
            raise ValueError(f"label code {self.code!r} must be printable")

    def matches_prefix(self, prefix: str) -> bool:
        return self.code.startswith(prefix)


__all__ = ["JumpTarget", "LabelAssignment"]
