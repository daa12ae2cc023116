"""Character trie resolving typed prefixes against assigned label codes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Literal, Optional

from .models import LabelAssignment


@dataclass(slots=True)
class LabelNode:
    assignment: Optional[LabelAssignment] = None
    children: Dict[str, "LabelNode"] = field(default_factory=dict)

    def child(self, char: str) -> "LabelNode":
        return self.children.setdefault(char, LabelNode())

    def next_chars(self) -> tuple[str, ...]:
        return tuple(sorted(self.children))


@dataclass(frozen=True, slots=True)
class LabelLookup:
    """Outcome of resolving one typed prefix."""

    status: Literal["match", "pending", "miss"]
    assignment: Optional[LabelAssignment] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


class DuplicateLabelError(ValueError):
    def __init__(self, code: str) -> None:
        super().__init__(f"Label code '{code}' is assigned twice")
        self.code = code


class LabelTrie:
    """Prefix trie over label codes.

    A node holding an assignment resolves as a match even when longer codes
    continue past it; prefix-free code sets never hit that case.
    """

    def __init__(self, assignments: Iterable[LabelAssignment] = ()) -> None:
        self._root = LabelNode()
        self._size = 0
        for assignment in assignments:
            self.add(assignment)

    def __len__(self) -> int:
        return self._size

    def add(self, assignment: LabelAssignment) -> None:
        node = self._root
        for char in assignment.code:
            node = node.child(char)
        if node.assignment is not None:
            raise DuplicateLabelError(assignment.code)
        node.assignment = assignment
        self._size += 1

    def lookup(self, prefix: str) -> LabelLookup:
        node = self._root
        consumed = 0
        for char in prefix:
            child = node.children.get(char)
            if child is None:
                return LabelLookup(status="miss", consumed=consumed)
            node = child
            consumed += 1

        if node.assignment is not None and consumed:
            return LabelLookup(
                status="match", assignment=node.assignment, consumed=consumed
            )

        next_expected = node.next_chars()
        if next_expected:
            return LabelLookup(
                status="pending", consumed=consumed, next_expected=next_expected
            )
        return LabelLookup(status="miss", consumed=consumed)


__all__ = ["DuplicateLabelError", "LabelLookup", "LabelNode", "LabelTrie"]
