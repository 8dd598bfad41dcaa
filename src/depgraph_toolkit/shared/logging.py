"""
Logging utilities for the dependency graph toolkit.

All toolkit loggers live below the ``depgraph_toolkit`` namespace, so one call
to ``setup_logging`` configures every module logger.
"""

import logging
import sys
import time
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "depgraph_toolkit"

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PLAIN_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_handler(use_rich: bool) -> logging.Handler:
    if use_rich:
        # Descriptor paths and package names may contain [brackets]
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True), show_time=True, show_path=False, markup=False
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=PLAIN_FORMAT, datefmt=PLAIN_DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO", log_file: Path | None = None, use_rich: bool = True
) -> logging.Logger:
    """Configure the toolkit's root logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that receives a plain-text copy of every record
        use_rich: Render console records with rich instead of a plain stream handler

    Returns:
        The ``depgraph_toolkit`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_console_handler(use_rich))

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(fmt=PLAIN_FORMAT, datefmt=PLAIN_DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a toolkit logger (the root toolkit logger by default)."""
    return logging.getLogger(name)


class ProgressLogger:
    """Reports per-item progress of a multi-step operation such as descriptor parsing.

    Counts are kept internally; ``finish_operation`` prints and returns the tally.
    """

    def __init__(self, logger: logging.Logger | None = None, use_rich: bool = True):
        self.logger = logger or get_logger()
        self.use_rich = use_rich
        self.console = Console(stderr=True) if use_rich else None

        self.operation: str | None = None
        self.succeeded = 0
        self.failed = 0
        self._started_at: float | None = None

    def _emit(self, message: str, style: str, level: int = logging.INFO) -> None:
        if self.console is not None:
            self.console.print(message, style=style, markup=False)
        else:
            self.logger.log(level, message)

    def start_operation(self, operation_name: str, total_items: int | None = None) -> None:
        self.operation = operation_name
        self.succeeded = 0
        self.failed = 0
        self._started_at = time.perf_counter()

        suffix = f" ({total_items} items)" if total_items else ""
        self._emit(f"{operation_name}{suffix}...", "blue bold")

    def log_item_processed(self, item_name: str, success: bool = True) -> None:
        rich_output = self.console is not None
        if success:
            self.succeeded += 1
            marker = "✓" if rich_output else "OK"
            self._emit(f"  {marker} {item_name}", "green")
        else:
            self.failed += 1
            marker = "✗" if rich_output else "FAILED"
            self._emit(f"  {marker} {item_name}", "red", logging.ERROR)

    def finish_operation(self) -> dict[str, float | int]:
        """Print the summary line and return the counts.

        Returns:
            Dictionary with ``succeeded``, ``failed`` and ``duration`` (seconds)
        """
        duration = time.perf_counter() - self._started_at if self._started_at else 0.0
        total = self.succeeded + self.failed
        name = self.operation or "Operation"

        if self.failed:
            message = f"{name}: {self.succeeded}/{total} succeeded, {self.failed} skipped"
            style = "yellow bold"
        else:
            message = f"{name}: {total} processed"
            style = "green bold"
        self._emit(f"{message} in {duration:.2f}s", style)

        return {"succeeded": self.succeeded, "failed": self.failed, "duration": duration}
