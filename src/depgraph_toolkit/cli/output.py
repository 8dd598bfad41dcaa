"""
CLI output management.

Commands print through a CLIOutputManager so that the global --quiet and
--verbose flags apply uniformly: results go to stdout, problems to stderr.
"""

from enum import Enum

from rich.console import Console
from rich.table import Table


class OutputLevel(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"  # Errors and warnings only
    NORMAL = "normal"
    VERBOSE = "verbose"  # Adds debug details


class CLIOutputManager:
    """Routes command output to rich consoles according to the verbosity level."""

    def __init__(
        self,
        level: OutputLevel = OutputLevel.NORMAL,
        console: Console | None = None,
        error_console: Console | None = None,
    ):
        self.level = level
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)

    @property
    def is_quiet(self) -> bool:
        return self.level == OutputLevel.QUIET

    @property
    def is_verbose(self) -> bool:
        return self.level == OutputLevel.VERBOSE

    def success(self, message: str) -> None:
        if not self.is_quiet:
            self.console.print(f"✓ {message}", style="green", markup=False)

    def debug(self, message: str) -> None:
        if self.is_verbose:
            self.console.print(message, style="dim", markup=False)

    def table(self, table: Table) -> None:
        if not self.is_quiet:
            self.console.print(table)

    def warning(self, message: str) -> None:
        """Shown even in quiet mode."""
        self.error_console.print(f"⚠ {message}", style="yellow", markup=False)

    def error(self, message: str) -> None:
        """Shown even in quiet mode."""
        self.error_console.print(f"✗ {message}", style="red bold", markup=False)


def create_output_manager(quiet: bool = False, verbose: bool = False) -> CLIOutputManager:
    """Create an output manager from the global CLI flags; --quiet wins over --verbose."""
    if quiet:
        level = OutputLevel.QUIET
    elif verbose:
        level = OutputLevel.VERBOSE
    else:
        level = OutputLevel.NORMAL
    return CLIOutputManager(level=level)
