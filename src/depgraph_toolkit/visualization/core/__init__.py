"""
Core visualization components.

This module contains the styling rules and data transformation
functionality shared by layout engines and exports.
"""

from .data_transformer import GraphSnapshotTransformer
from .graph_processors import GraphStyler

__all__ = ["GraphStyler", "GraphSnapshotTransformer"]
