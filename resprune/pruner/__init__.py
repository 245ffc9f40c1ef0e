"""Classification, excision and the pruning pipeline."""

from __future__ import annotations

from .editor import ResourceEditor, collapse_blank_lines, is_empty_container
from .engine import KEEP_RULES, REMOVAL_REASON, classify, execute
from .pipeline import MAX_CASCADE_ITERATIONS, AnalysisResult, ResourcePruner

__all__ = [
    "AnalysisResult",
    "KEEP_RULES",
    "MAX_CASCADE_ITERATIONS",
    "REMOVAL_REASON",
    "ResourceEditor",
    "ResourcePruner",
    "classify",
    "collapse_blank_lines",
    "execute",
    "is_empty_container",
]
