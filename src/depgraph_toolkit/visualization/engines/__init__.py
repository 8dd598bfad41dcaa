"""
Visualization engines for graph layouts.
"""

from .force_directed_engine import ForceDirectedEngine

__all__ = ["ForceDirectedEngine"]
