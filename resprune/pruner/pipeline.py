"""Pipeline driver: collect, detect, classify and optionally prune."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Set

from ..collectors import AssetCollector, default_collector
from ..config import PrunerConfig
from ..detectors import ReferenceDetector, default_detector
from ..logging import get_logger
from ..models import Classification, DeclaredAsset, ExecutionReport, PruneSummary, Reference
from .editor import ResourceEditor
from .engine import classify, execute

MAX_CASCADE_ITERATIONS = 5


@dataclass
class AnalysisResult:
    """Outcome of a dry run."""

    declared: List[DeclaredAsset]
    references: Set[Reference]
    classification: Classification

    @property
    def unused(self) -> List[DeclaredAsset]:
        return self.classification.to_remove


class ResourcePruner:
    """Coordinates collectors, detectors, classification and excision."""

    def __init__(
        self,
        config: PrunerConfig,
        collector: Optional[AssetCollector] = None,
        detector: Optional[ReferenceDetector] = None,
        editor: Optional[ResourceEditor] = None,
    ) -> None:
        self.config = config
        self.collector = collector or default_collector()
        self.detector = detector or default_detector(config.framework_style_prefixes)
        self.editor = editor or ResourceEditor()
        self.logger = get_logger("pruner")

    def analyze(self) -> AnalysisResult:
        """Classify every declared resource without touching the filesystem."""
        declared = self.collector.collect(self.config.declaration_roots)
        references = self.detector.detect(self.config.source_roots, self.config.declaration_roots)
        self.logger.debug(
            "Found %d declared resources and %d references", len(declared), len(references)
        )
        classification = classify(
            declared,
            references,
            self.config.compiled_patterns(),
            self.config.target_resource_types,
            self.config.exclude_resource_types,
        )
        return AnalysisResult(declared, references, classification)

    def prune(self, cascade: Optional[bool] = None) -> PruneSummary:
        """Remove unused resources, repeating while removals expose new ones."""
        if cascade is None:
            cascade = self.config.cascade_prune
        max_iterations = MAX_CASCADE_ITERATIONS if cascade else 1

        first = analysis = self.analyze()
        report = ExecutionReport()
        iterations = 1
        while True:
            unused = len(analysis.unused)
            if cascade:
                self.logger.info("Cascade iteration %d: %d unused resources", iterations, unused)

            iteration_report = execute(analysis.classification, self.editor)
            report = report.merge(iteration_report)
            if not unused or iteration_report.removed_count == 0:
                break
            if iterations == max_iterations:
                if cascade:
                    self.logger.info("Stopped cascading after %d iterations", iterations)
                break
            iterations += 1
            analysis = self.analyze()

        return PruneSummary(
            iterations=iterations,
            report=report,
            classification=analysis.classification,
            declared_count=len(first.declared),
            reference_count=len(first.references),
        )


__all__ = ["AnalysisResult", "MAX_CASCADE_ITERATIONS", "ResourcePruner"]
