"""Label overlay contract and the trie-backed implementation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional, Protocol, Sequence

from jump_motion.host.view import EditorView
from jump_motion.runtime import telemetry

from .models import JumpTarget, LabelAssignment
from .trie import LabelTrie

MatchStatus = Literal["navigated", "pending", "no_candidates"]

NAVIGATED: MatchStatus = "navigated"
PENDING: MatchStatus = "pending"
NO_CANDIDATES: MatchStatus = "no_candidates"


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Reply to ``LabelOverlay.try_match``.

    ``navigated`` means the overlay already moved the caret to ``target``.
    """

    status: MatchStatus
    code: str
    target: Optional[JumpTarget] = None
    next_expected: tuple[str, ...] = ()


class LabelOverlay(Protocol):
    def try_match(self, code: str) -> MatchResult:
        ...

    def release(self) -> None:
        ...


class OverlayFactory(Protocol):
    def __call__(self, view: EditorView, text_structure: object) -> LabelOverlay:
        ...


LabelAssigner = Callable[[EditorView, object], Sequence[LabelAssignment]]
RenderHook = Callable[[Sequence[LabelAssignment]], None]
ClearHook = Callable[[], None]


def _noop_render(assignments: Sequence[LabelAssignment]) -> None:
    del assignments


def _noop_clear() -> None:
    return None


class TrieLabelOverlay:
    """Overlay answering matches from a ``LabelTrie``.

    The render hook receives the full label set on construction and the
    narrowed set after every pending prefix; the clear hook runs once on
    release.
    """

    def __init__(
        self,
        view: EditorView,
        assignments: Sequence[LabelAssignment],
        *,
        on_render: RenderHook = _noop_render,
        on_clear: ClearHook = _noop_clear,
    ) -> None:
        self.view = view
        self.assignments = tuple(assignments)
        self._trie = LabelTrie(self.assignments)
        self._on_render = on_render
        self._on_clear = on_clear
        self._released = False
        self._on_render(self.assignments)

    @property
    def released(self) -> bool:
        return self._released

    def visible_labels(self, prefix: str = "") -> tuple[LabelAssignment, ...]:
        return tuple(a for a in self.assignments if a.matches_prefix(prefix))

    def try_match(self, code: str) -> MatchResult:
        if self._released:
            raise RuntimeError("overlay already released")

        with telemetry.span(
            "labels::match",
            component="labels",
            metadata={"view": self.view.name, "length": len(code)},
        ) as handle:
            lookup = self._trie.lookup(code)
            handle.add_metadata("lookup", lookup.status)

            if lookup.status == "match" and lookup.assignment is not None:
                target = lookup.assignment.target
                self.view.move_caret(target.position)
                return MatchResult(status=NAVIGATED, code=code, target=target)

            if lookup.status == "pending":
                self._on_render(self.visible_labels(code))
                return MatchResult(
                    status=PENDING, code=code, next_expected=lookup.next_expected
                )

            return MatchResult(status=NO_CANDIDATES, code=code)

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._on_clear()


def trie_overlay_factory(
    assign: LabelAssigner,
    *,
    on_render: RenderHook = _noop_render,
    on_clear: ClearHook = _noop_clear,
) -> OverlayFactory:
    """Build an ``OverlayFactory`` producing ``TrieLabelOverlay`` instances."""

    def create(view: EditorView, text_structure: object) -> LabelOverlay:
        assignments = assign(view, text_structure)
        return TrieLabelOverlay(
            view, assignments, on_render=on_render, on_clear=on_clear
        )

    return create


__all__ = [
    "LabelAssigner",
    "LabelOverlay",
    "MatchResult",
    "MatchStatus",
    "NAVIGATED",
    "NO_CANDIDATES",
    "OverlayFactory",
    "PENDING",
    "TrieLabelOverlay",
    "trie_overlay_factory",
]
