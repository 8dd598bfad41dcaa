"""
Dependency graph construction.
"""

from .builder import (
    PLACEHOLDER_PROJECT_NAME,
    DependencyGraphBuilder,
    assembly_node_id,
    build_dependency_graph,
    create_placeholder_project,
    package_node_id,
    project_node_id,
)

__all__ = [
    "DependencyGraphBuilder",
    "build_dependency_graph",
    "create_placeholder_project",
    "PLACEHOLDER_PROJECT_NAME",
    "package_node_id",
    "assembly_node_id",
    "project_node_id",
]
