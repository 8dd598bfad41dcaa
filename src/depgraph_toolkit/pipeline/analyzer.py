"""
End-to-end analysis of a solution root.

Discovery, parsing, graph building and security classification run one after
the other; the result carries everything a renderer or report needs.
"""

import logging
from pathlib import Path

from ..graph.builder import DependencyGraphBuilder
from ..shared.exceptions import DescriptorError
from ..shared.logging import ProgressLogger
from ..shared.models import AnalysisConfig, AnalysisResult, ProjectRecord
from .descriptor import DescriptorParser
from .discovery import DescriptorLocator
from .security.classification import SecurityClassifier


class DependencyAnalyzer:
    """Runs the analysis pipeline for one solution root at a time."""

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        locator: DescriptorLocator | None = None,
        parser: DescriptorParser | None = None,
        builder: DependencyGraphBuilder | None = None,
        classifier: SecurityClassifier | None = None,
        progress: ProgressLogger | None = None,
    ):
        self.config = config or AnalysisConfig()
        self.locator = locator or DescriptorLocator(self.config)
        self.parser = parser or DescriptorParser(self.config)
        self.builder = builder or DependencyGraphBuilder()
        self.classifier = classifier or SecurityClassifier()
        self.progress = progress
        self.logger = logging.getLogger(__name__)

    def analyze(self, root: Path) -> AnalysisResult:
        """Analyze a solution file or directory.

        Args:
            root: Path to a .sln file, a project directory, or any file inside one

        Returns:
            AnalysisResult with a fresh graph snapshot and its security report.
            Descriptors that could not be read are skipped and listed.
        """
        root = Path(root)

        descriptors = self.locator.locate(root)
        self.logger.info(f"Found {len(descriptors)} project descriptors under {root}")

        projects, skipped = self.parse_descriptors(descriptors)

        graph = self.builder.build(projects)
        security = self.classifier.classify(graph.projects)

        return AnalysisResult(
            root=root,
            graph=graph,
            security=security,
            used_placeholder=not projects,
            skipped_descriptors=skipped,
        )

    def parse_descriptors(self, descriptors: list[Path]) -> tuple[list[ProjectRecord], list[str]]:
        """Parse descriptors in order, collecting records and the paths that failed."""
        if self.progress:
            self.progress.start_operation("Parsing project descriptors", len(descriptors))

        projects: list[ProjectRecord] = []
        skipped: list[str] = []
        for descriptor in descriptors:
            try:
                projects.append(self.parser.parse(descriptor))
            except DescriptorError as e:
                self.logger.error(f"Skipping descriptor {descriptor}: {e}")
                skipped.append(str(descriptor))
                if self.progress:
                    self.progress.log_item_processed(descriptor.name, success=False)
                continue

            if self.progress:
                self.progress.log_item_processed(descriptor.name)

        if self.progress:
            self.progress.finish_operation()
        return projects, skipped


def analyze_solution(root: Path, config: AnalysisConfig | None = None) -> AnalysisResult:
    """Convenience function running a one-off analysis."""
    return DependencyAnalyzer(config).analyze(root)
