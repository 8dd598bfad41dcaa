"""
Output management and organization for the dependency graph toolkit.
"""

import re
from datetime import datetime
from pathlib import Path

from .exceptions import PROJECT_DESCRIPTOR_EXTENSIONS

DESCRIPTOR_SUFFIXES = (".sln", *PROJECT_DESCRIPTOR_EXTENSIONS)


class OutputManager:
    """Manages organized output structure for exported graph snapshots."""

    def __init__(self, base_output_dir: Path = Path("outputs")):
        """Initialize output manager.

        Args:
            base_output_dir: Base directory for all outputs
        """
        self.base_dir = Path(base_output_dir)

        # Subdirectories are created lazily when a path is requested
        self.dirs = {
            "layouts": self.base_dir / "layouts",
            "reports": self.base_dir / "reports",
        }

    def _ensure_dir_exists(self, dir_path: Path) -> Path:
        """Ensure directory exists, creating it if necessary.

        Args:
            dir_path: Directory path to ensure exists

        Returns:
            The directory path
        """
        dir_path.mkdir(parents=True, exist_ok=True)
        return dir_path

    def clean_solution_name(self, root: Path) -> str:
        """Derive a filename-safe name from an analysis root.

        Args:
            root: Solution file or directory that was analyzed

        Returns:
            Clean name suitable for filenames
        """
        root = Path(root)
        name = root.stem if root.suffix.lower() in DESCRIPTOR_SUFFIXES else root.name
        clean_name = re.sub(r"[^\w\-.]", "_", name or "solution")
        return clean_name.lower()

    def _build_path(self, kind: str, root: Path, suffix: str, no_cache: bool) -> Path:
        name = self.clean_solution_name(root)
        if no_cache:
            # Consistent filename without timestamp for overwriting
            filename = f"{name}_{suffix}.json"
        else:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M")
            filename = f"{name}_{suffix}_{timestamp}.json"

        self._ensure_dir_exists(self.dirs[kind])
        return self.dirs[kind] / filename

    def get_layout_path(self, root: Path, no_cache: bool = False) -> Path:
        """Get organized path for a laid-out graph snapshot.

        Args:
            root: Analysis root
            no_cache: If True, generate consistent filename without timestamp

        Returns:
            Path for the layout JSON file
        """
        return self._build_path("layouts", root, "layout", no_cache)

    def get_report_path(self, root: Path, no_cache: bool = False) -> Path:
        """Get organized path for an analysis report (graph + security buckets).

        Args:
            root: Analysis root
            no_cache: If True, generate consistent filename without timestamp

        Returns:
            Path for the report JSON file
        """
        return self._build_path("reports", root, "analysis", no_cache)
