"""
Exception hierarchy for the dependency graph toolkit.

Every error raised by the toolkit derives from ``DepGraphToolkitError`` and
carries a ``context`` dict (descriptor path, solution path, node id, ...) that
is appended to the message when the error is printed.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

PROJECT_DESCRIPTOR_EXTENSIONS = (".csproj", ".vbproj", ".fsproj")


class DepGraphToolkitError(Exception):
    """Base exception for all dependency graph toolkit errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human readable description
            context: Structured details about the failing input
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} (Context: {details})"


class DiscoveryError(DepGraphToolkitError):
    """A solution file or directory could not be read while locating descriptors."""


class DescriptorError(DepGraphToolkitError):
    """Base exception for project descriptor problems."""


class DescriptorReadError(DescriptorError):
    """A descriptor is missing, unreadable, or not well-formed XML.

    The analyzer skips such descriptors instead of failing the whole run.
    """


class GraphError(DepGraphToolkitError):
    """A project record cannot be turned into graph nodes."""


class LayoutError(DepGraphToolkitError):
    """Invalid layout configuration or a layout operation on an unknown node."""


class ProcessingError(DepGraphToolkitError):
    """Input data failed validation, or an export could not be written."""


def wrap_external_error(
    error: Exception, context: dict[str, Any] | None = None
) -> DepGraphToolkitError:
    """Translate a standard-library exception into the toolkit hierarchy.

    Args:
        error: Exception raised by the standard library or a dependency
        context: Extra context; ``original_error`` is added to it

    Returns:
        The matching DepGraphToolkitError subclass instance
    """
    message = str(error)
    error_context = context or {}
    error_context["original_error"] = type(error).__name__

    if isinstance(error, ET.ParseError):
        return DescriptorReadError(f"Malformed descriptor XML: {message}", error_context)

    if isinstance(error, FileNotFoundError):
        filename = error.filename
        if filename and Path(str(filename)).suffix.lower() in PROJECT_DESCRIPTOR_EXTENSIONS:
            return DescriptorReadError(f"Descriptor not found: {message}", error_context)
        return DiscoveryError(f"File not found: {message}", error_context)

    if isinstance(error, PermissionError):
        return DiscoveryError(f"Permission denied: {message}", error_context)

    if isinstance(error, ValueError | TypeError):
        return ProcessingError(f"Data validation error: {message}", error_context)

    return DepGraphToolkitError(f"Unexpected error: {message}", error_context)


def create_error_context(**kwargs) -> dict[str, Any]:
    """Build an error context, dropping None values and stringifying paths."""
    return {
        key: str(value) if isinstance(value, Path) else value
        for key, value in kwargs.items()
        if value is not None
    }
