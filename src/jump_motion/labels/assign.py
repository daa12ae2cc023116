"""Minimal target enumeration and code assignment for demo hosts."""

from __future__ import annotations

import re
from itertools import product
from typing import Iterable, List, Optional, Sequence

from jump_motion.host.view import EditorView, Position
from jump_motion.runtime.config import DEFAULT_LABEL_ALPHABET

from .models import JumpTarget, LabelAssignment

WORD_PATTERN = re.compile(r"\w+")


def word_start_targets(first_row: int, lines: Iterable[str]) -> List[JumpTarget]:
    """Every word start in ``lines``, in reading order."""

    targets: List[JumpTarget] = []
    for offset, line in enumerate(lines):
        for match in WORD_PATTERN.finditer(line):
            targets.append(
                JumpTarget(
                    position=(first_row + offset, match.start()),
                    text=match.group(),
                )
            )
    return targets


def generate_codes(count: int, alphabet: str = DEFAULT_LABEL_ALPHABET) -> List[str]:
    """Return ``count`` prefix-free codes, as short as the alphabet allows.

    Up to ``len(alphabet)`` codes are single characters. Up to its square, the
    leading characters stay single and the trailing ones become prefixes of
    two-character codes. Beyond that every code has the same length.
    """

    size = len(alphabet)
    if count <= 0:
        return []
    if count <= size:
        return list(alphabet[:count])
    if size < 2:
        raise ValueError(f"{count} codes need at least two alphabet characters")
    if count <= size * size:
        singles = (size * size - count) // (size - 1)
        pairs = [p + c for p in alphabet[singles:] for c in alphabet]
        return list(alphabet[:singles]) + pairs[: count - singles]

    length = 2
    while size**length < count:
        length += 1
    codes: List[str] = []
    for combo in product(alphabet, repeat=length):
        codes.append("".join(combo))
        if len(codes) == count:
            break
    return codes


def _distance(target: JumpTarget, caret: Position) -> tuple[int, int]:
    return (abs(target.row - caret[0]), abs(target.column - caret[1]))


def assign_codes(
    targets: Sequence[JumpTarget],
    alphabet: str = DEFAULT_LABEL_ALPHABET,
    *,
    caret: Optional[Position] = None,
) -> List[LabelAssignment]:
    """Pair targets with codes; nearest to ``caret`` get the shortest."""

    ordered = list(targets)
    if caret is not None:
        ordered.sort(key=lambda target: _distance(target, caret))
    codes = generate_codes(len(ordered), alphabet)
    # generate_codes hands out shortest codes first.
    return [LabelAssignment(code=code, target=t) for code, t in zip(codes, ordered)]


def word_start_assignments(
    view: EditorView,
    text_structure: object = None,
    *,
    alphabet: str = DEFAULT_LABEL_ALPHABET,
) -> List[LabelAssignment]:
    del text_structure
    first_row, lines = view.visible_lines()
    targets = word_start_targets(first_row, lines)
    return assign_codes(targets, alphabet, caret=view.caret)


__all__ = [
    "WORD_PATTERN",
    "assign_codes",
    "generate_codes",
    "word_start_assignments",
    "word_start_targets",
]
