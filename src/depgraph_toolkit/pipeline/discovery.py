"""
Project descriptor discovery.

Finds candidate project descriptors either from the project registrations of a
solution file or, as a fallback, by recursively scanning a directory tree.
"""

import logging
import os
import re
from collections.abc import Iterator
from pathlib import Path

from ..shared.exceptions import DiscoveryError, create_error_context
from ..shared.models import AnalysisConfig


def build_project_line_pattern(extensions: tuple[str, ...]) -> re.Pattern[str]:
    """Pattern for `Project("{guid}") = "Name", "rel\\path.csproj", ...` lines."""
    alternatives = "|".join(re.escape(ext.lstrip(".")) for ext in extensions)
    return re.compile(rf'Project\(".*"\)\s*=\s*".*",\s*"([^"]+\.(?:{alternatives}))"')


class DescriptorLocator:
    """Locates project descriptors below an analysis root."""

    def __init__(self, config: AnalysisConfig | None = None):
        self.config = config or AnalysisConfig()
        self.logger = logging.getLogger(__name__)
        self.project_line_pattern = build_project_line_pattern(self.config.project_extensions)

    def locate(self, root: Path) -> list[Path]:
        """Return descriptor paths in discovery order.

        Args:
            root: Solution file, directory, or any file inside the tree to scan

        Returns:
            Absolute descriptor paths (not deduplicated)
        """
        return list(self.iter_descriptors(root))

    def iter_descriptors(self, root: Path) -> Iterator[Path]:
        """Yield descriptor paths one at a time."""
        root = Path(os.path.abspath(root))

        if not root.exists():
            self.logger.warning(f"Analysis root does not exist: {root}")
            return

        if root.is_dir():
            yield from self.scan_directory(root)
            return

        if root.suffix.lower() != self.config.solution_extension:
            yield from self.scan_directory(root.parent)
            return

        try:
            project_paths = self.extract_project_paths(root)
        except DiscoveryError as e:
            self.logger.error(f"{e}; falling back to directory scan")
            project_paths = []

        if not project_paths:
            self.logger.info(f"No projects registered in {root.name}, scanning {root.parent}")
            yield from self.scan_directory(root.parent)
            return

        self.logger.debug(f"Solution {root.name} registers {len(project_paths)} projects")
        yield from project_paths

    def extract_project_paths(self, solution_path: Path) -> list[Path]:
        """Parse project registrations out of a solution file.

        Args:
            solution_path: Path to the solution file

        Returns:
            Absolute descriptor paths in registration order

        Raises:
            DiscoveryError: If the solution cannot be read
        """
        try:
            content = solution_path.read_text(encoding="utf-8-sig", errors="replace")
        except OSError as e:
            raise DiscoveryError(
                f"Failed to read solution file: {e}",
                create_error_context(solution_path=str(solution_path)),
            ) from e

        solution_dir = solution_path.parent
        return self.parse_solution_text(content, solution_dir)

    def parse_solution_text(self, content: str, solution_dir: Path) -> list[Path]:
        """Resolve every registered project path in solution text against its directory."""
        project_paths = []
        for match in self.project_line_pattern.finditer(content):
            relative_path = match.group(1).replace("\\", os.sep)
            project_paths.append(Path(os.path.normpath(os.path.join(solution_dir, relative_path))))
        return project_paths

    def scan_directory(self, directory: Path) -> Iterator[Path]:
        """Recursively yield descriptor files below a directory.

        Hidden directories and dependency-download directories are skipped. A
        directory that cannot be listed is logged and skipped.
        """
        try:
            entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
        except OSError as e:
            self.logger.error(f"Error scanning directory {directory}: {e}")
            return

        for entry in entries:
            full_path = Path(entry.path)
            try:
                if entry.is_dir():
                    if self._should_descend(entry.name):
                        yield from self.scan_directory(full_path)
                elif entry.is_file() and self._is_project_file(entry.name):
                    yield full_path
            except OSError as e:
                self.logger.error(f"Error inspecting {full_path}: {e}")

    def _should_descend(self, name: str) -> bool:
        return not name.startswith(".") and name not in self.config.excluded_directories

    def _is_project_file(self, name: str) -> bool:
        return Path(name).suffix.lower() in self.config.project_extensions
