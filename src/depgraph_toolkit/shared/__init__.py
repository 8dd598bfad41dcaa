"""
Shared module for core functionality.

Contains core models, exceptions, logging and output management
functionality shared across the toolkit.
"""

from .exceptions import (
    DepGraphToolkitError,
    DescriptorError,
    DescriptorReadError,
    DiscoveryError,
    GraphError,
    LayoutError,
    ProcessingError,
    create_error_context,
    wrap_external_error,
)
from .logging import ProgressLogger, get_logger, setup_logging
from .models import (
    AnalysisConfig,
    AnalysisResult,
    DependencyGraph,
    EdgeKind,
    GraphEdge,
    GraphLayout,
    GraphNode,
    LayoutConfig,
    NodeKind,
    NodeLayout,
    PackageClassification,
    PackageReference,
    ProjectRecord,
    SecurityReport,
    SecurityStatus,
)
from .output import OutputManager

__all__ = [
    # Core models
    "PackageReference",
    "ProjectRecord",
    "NodeKind",
    "EdgeKind",
    "GraphNode",
    "GraphEdge",
    "DependencyGraph",
    "SecurityStatus",
    "PackageClassification",
    "SecurityReport",
    "AnalysisResult",
    "AnalysisConfig",
    "LayoutConfig",
    "NodeLayout",
    "GraphLayout",
    # Core exceptions
    "DepGraphToolkitError",
    "DiscoveryError",
    "DescriptorError",
    "DescriptorReadError",
    "GraphError",
    "LayoutError",
    "ProcessingError",
    "wrap_external_error",
    "create_error_context",
    # Management
    "OutputManager",
    # Utils
    "setup_logging",
    "get_logger",
    "ProgressLogger",
]
