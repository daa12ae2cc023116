"""Label collaborators: targets, codes, matching overlays."""

from .assign import (
    assign_codes,
    generate_codes,
    word_start_assignments,
    word_start_targets,
)
from .models import JumpTarget, LabelAssignment
from .overlay import (
    NAVIGATED,
    NO_CANDIDATES,
    PENDING,
    LabelAssigner,
    LabelOverlay,
    MatchResult,
    MatchStatus,
    OverlayFactory,
    TrieLabelOverlay,
    trie_overlay_factory,
)
from .trie import DuplicateLabelError, LabelLookup, LabelTrie

__all__ = [
    "DuplicateLabelError",
    "JumpTarget",
    "LabelAssigner",
    "LabelAssignment",
    "LabelLookup",
    "LabelOverlay",
    "LabelTrie",
    "MatchResult",
    "MatchStatus",
    "NAVIGATED",
    "NO_CANDIDATES",
    "OverlayFactory",
    "PENDING",
    "TrieLabelOverlay",
    "assign_codes",
    "generate_codes",
    "trie_overlay_factory",
    "word_start_assignments",
    "word_start_targets",
]
