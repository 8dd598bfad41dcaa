"""
Dependency Graph Toolkit

Analyzes .NET solutions: discovers project descriptors, parses their package,
project and assembly references, builds a dependency graph, classifies
packages against known-risk rules and lays the graph out for rendering.
"""

__version__ = "0.1.0"

from .graph import DependencyGraphBuilder, build_dependency_graph
from .pipeline import DependencyAnalyzer, DescriptorLocator, DescriptorParser, SecurityClassifier
from .shared import AnalysisConfig, AnalysisResult, DepGraphToolkitError, LayoutConfig
from .visualization import ForceDirectedEngine, GraphSnapshotTransformer

__all__ = [
    "__version__",
    "DescriptorLocator",
    "DescriptorParser",
    "DependencyGraphBuilder",
    "build_dependency_graph",
    "SecurityClassifier",
    "DependencyAnalyzer",
    "ForceDirectedEngine",
    "GraphSnapshotTransformer",
    "AnalysisConfig",
    "AnalysisResult",
    "LayoutConfig",
    "DepGraphToolkitError",
]
