"""Plain-text rendering of analysis and prune results for the CLI."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .models import DeclaredAsset, PruneSummary
from .pruner.pipeline import AnalysisResult

PREVIEW_LIMIT = 10


def group_by_type(assets: Iterable[DeclaredAsset]) -> Dict[str, List[DeclaredAsset]]:
    """Group assets by type name, keeping first-seen order."""
    groups: Dict[str, List[DeclaredAsset]] = {}
    for asset in assets:
        groups.setdefault(asset.asset_type.type_name, []).append(asset)
    return groups


def render_grouped(title: str, assets: Sequence[DeclaredAsset], limit: int = PREVIEW_LIMIT) -> List[str]:
    if not assets:
        return []
    lines = ["", f"{title}:"]
    for type_name, members in group_by_type(assets).items():
        lines.append(f"  {type_name}: {len(members)}")
        lines.extend(f"    - {asset.name}" for asset in members[:limit])
        if len(members) > limit:
            lines.append(f"    ... and {len(members) - limit} more")
    return lines


def render_analysis(result: AnalysisResult) -> str:
    classification = result.classification
    lines = [
        f"Detected {len(result.declared)} resources",
        f"Found {len(result.references)} resource references",
        "",
        "=== Analysis Results ===",
        f"Total resources: {len(result.declared)}",
        f"Resources to preserve: {len(classification.to_keep)}",
        f"Resources to prune: {len(classification.to_remove)}",
    ]
    lines.extend(render_grouped("Unused resources", classification.to_remove))
    return "\n".join(lines)


def render_prune(summary: PruneSummary, cascade: bool = False) -> str:
    report = summary.report
    lines = [
        f"Detected {summary.declared_count} resources",
        f"Found {summary.reference_count} resource references",
        "",
        "=== Pruning Results ===",
    ]
    if cascade and summary.iterations > 1:
        lines.append(f"Total iterations: {summary.iterations}")
    lines.append(f"Resources pruned: {report.removed_count}")
    if report.failures:
        lines.append(f"Errors: {report.failure_count}")
        lines.extend(f"  - {failure.asset.name}: {failure.message}" for failure in report.failures)
    lines.extend(render_grouped("Pruned resources", [removed.asset for removed in report.removed]))
    lines.append("")
    if report.is_success:
        lines.append("Pruning completed successfully!")
    else:
        lines.append(f"Pruning completed with {report.failure_count} errors.")
    return "\n".join(lines)


__all__ = ["PREVIEW_LIMIT", "group_by_type", "render_analysis", "render_grouped", "render_prune"]
