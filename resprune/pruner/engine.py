"""Classification of declared resources and execution of the removals."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import (
    AbstractSet,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from ..errors import PruneError
from ..logging import get_logger
from ..models import (
    Classification,
    DeclaredAsset,
    ElementLocation,
    ExecutionReport,
    FileLocation,
    KeptAsset,
    PruneFailure,
    Reference,
    RemovedAsset,
)
from .editor import ResourceEditor

NamePattern = Union[str, "re.Pattern[str]"]

REMOVAL_REASON = "No references found"

_logger = get_logger("pruner.engine")


@dataclass(frozen=True)
class RuleContext:
    """Lookup tables shared by every keep rule for one classification."""

    references_by_key: FrozenSet[Tuple[str, str]]
    referenced_names: FrozenSet[str]
    patterns: Tuple["re.Pattern[str]", ...]
    target_types: FrozenSet[str]
    exclude_types: FrozenSet[str]


KeepRule = Callable[[DeclaredAsset, RuleContext], Optional[str]]


def _excluded_type(asset: DeclaredAsset, context: RuleContext) -> Optional[str]:
    type_name = asset.asset_type.type_name
    if type_name in context.exclude_types:
        return "excluded resource type"
    return None


def _outside_target_types(asset: DeclaredAsset, context: RuleContext) -> Optional[str]:
    type_name = asset.asset_type.type_name
    if context.target_types and type_name not in context.target_types:
        return "outside target resource types"
    return None


def _matched_exclude_pattern(asset: DeclaredAsset, context: RuleContext) -> Optional[str]:
    for pattern in context.patterns:
        if pattern.fullmatch(asset.name):
            return f"matched exclude pattern: {pattern.pattern}"
    return None


def _referenced(asset: DeclaredAsset, context: RuleContext) -> Optional[str]:
    if (asset.name, asset.asset_type.type_name) in context.references_by_key:
        return "referenced"
    return None


def _referenced_by_name(asset: DeclaredAsset, context: RuleContext) -> Optional[str]:
    # Over-approximates: an unrelated resource of another type with the same name also keeps it.
    if asset.name in context.referenced_names:
        return "referenced by name (type mismatch)"
    return None


# Order matters: type filters win over references.
KEEP_RULES: Tuple[KeepRule, ...] = (
    _excluded_type,
    _outside_target_types,
    _matched_exclude_pattern,
    _referenced,
    _referenced_by_name,
)


def compile_patterns(patterns: Iterable[NamePattern]) -> Tuple["re.Pattern[str]", ...]:
    return tuple(
        pattern if isinstance(pattern, re.Pattern) else re.compile(pattern) for pattern in patterns
    )


def keep_reason(asset: DeclaredAsset, context: RuleContext) -> Optional[str]:
    """Return the first matching keep reason, or None when the asset is removable."""
    for rule in KEEP_RULES:
        reason = rule(asset, context)
        if reason is not None:
            return reason
    return None


def classify(
    declared: Sequence[DeclaredAsset],
    references: AbstractSet[Reference],
    exclude_patterns: Iterable[NamePattern] = (),
    target_types: Iterable[str] = (),
    exclude_types: Iterable[str] = (),
) -> Classification:
    """Split ``declared`` into resources to remove and resources to keep."""
    context = RuleContext(
        references_by_key=frozenset((ref.name, ref.asset_type.type_name) for ref in references),
        referenced_names=frozenset(ref.name for ref in references),
        patterns=compile_patterns(exclude_patterns),
        target_types=frozenset(target_types),
        exclude_types=frozenset(exclude_types),
    )

    classification = Classification()
    for asset in declared:
        reason = keep_reason(asset, context)
        if reason is None:
            classification.to_remove.append(asset)
        else:
            classification.to_keep.append(asset)
            classification.reasons[asset] = reason
    return classification


def execute(
    classification: Classification, editor: Optional[ResourceEditor] = None
) -> ExecutionReport:
    """Apply a classification to disk, isolating failures per file."""
    editor = editor or ResourceEditor()
    report = ExecutionReport()

    file_assets: List[DeclaredAsset] = []
    element_groups: Dict[Path, List[DeclaredAsset]] = defaultdict(list)
    for asset in classification.to_remove:
        if isinstance(asset.location, ElementLocation):
            element_groups[asset.path].append(asset)
        elif isinstance(asset.location, FileLocation):
            file_assets.append(asset)
        else:
            report.failures.append(
                PruneFailure(asset, f"Unsupported location type: {type(asset.location).__name__}")
            )

    for asset in file_assets:
        try:
            editor.remove_file(asset)
        except (OSError, PruneError) as exc:
            _logger.error("Failed to remove %s: %s", asset.name, exc)
            report.failures.append(PruneFailure(asset, str(exc) or type(exc).__name__))
        else:
            report.removed.append(RemovedAsset(asset, REMOVAL_REASON))

    for path, assets in element_groups.items():
        try:
            editor.remove_elements(assets)
        except (OSError, UnicodeDecodeError, PruneError) as exc:
            _logger.error("Failed to edit %s: %s", path, exc)
            message = str(exc) or type(exc).__name__
            report.failures.extend(PruneFailure(asset, message) for asset in assets)
        else:
            report.removed.extend(RemovedAsset(asset, REMOVAL_REASON) for asset in assets)

    report.kept.extend(
        KeptAsset(asset, classification.reason_for(asset)) for asset in classification.to_keep
    )
    return report


__all__ = [
    "KEEP_RULES",
    "REMOVAL_REASON",
    "RuleContext",
    "classify",
    "compile_patterns",
    "execute",
    "keep_reason",
]
