"""
Dependency graph visualization module.

Provides the spring-embedder layout engine and the transformation of analysis
results into render-ready snapshots. Rendering itself happens elsewhere.
"""

from .core import GraphSnapshotTransformer, GraphStyler
from .engines import ForceDirectedEngine

__all__ = ["ForceDirectedEngine", "GraphStyler", "GraphSnapshotTransformer"]
