import logging
import os
from collections.abc import Iterable

from ..shared.exceptions import GraphError, create_error_context
from ..shared.models import (
    ASSEMBLY_ID_PREFIX,
    PACKAGE_ID_PREFIX,
    DependencyGraph,
    EdgeKind,
    GraphEdge,
    GraphNode,
    NodeKind,
    PackageReference,
    ProjectRecord,
)

PLACEHOLDER_PROJECT_NAME = "SampleProject"


def create_placeholder_project() -> ProjectRecord:
    """Fixed record used when an analysis finds no projects at all.

    Substituting it keeps every snapshot non-empty so a renderer always has
    something to show; callers can tell by the project name or by
    ``AnalysisResult.used_placeholder``.
    """
    return ProjectRecord(
        name=PLACEHOLDER_PROJECT_NAME,
        path="/sample/path/SampleProject.csproj",
        output_type="Library",
        package_references=[
            PackageReference("Newtonsoft.Json", "13.0.3"),
            PackageReference("Microsoft.EntityFrameworkCore", "7.0.0"),
        ],
        project_references=[],
        dependencies=["System.Core", "System.Data"],
    )


def package_node_id(name: str) -> str:
    return f"{PACKAGE_ID_PREFIX}{name}"


def assembly_node_id(name: str) -> str:
    return f"{ASSEMBLY_ID_PREFIX}{name}"


def project_node_id(descriptor_path: str) -> str:
    """Node id a project reference points at: the descriptor stem."""
    normalized = descriptor_path.replace("\\", "/")
    return os.path.splitext(os.path.basename(normalized))[0]


class DependencyGraphBuilder:
    """Builds a deduplicated node/edge snapshot from project records."""

    def __init__(self):
        self.nodes: dict[str, GraphNode] = {}
        self.edges: list[GraphEdge] = []
        self.logger = logging.getLogger(__name__)

    def reset(self) -> None:
        """Discard any state from a previous build."""
        self.nodes = {}
        self.edges = []

    def add_node(self, node: GraphNode) -> GraphNode:
        """Adds a node unless one with the same id exists; returns the stored node."""
        existing = self.nodes.get(node.id)
        if existing is not None:
            if node.version is not None and existing.version != node.version:
                self.logger.debug(
                    f"Keeping first-seen version {existing.version} for {existing.label}, "
                    f"ignoring {node.version}"
                )
            return existing
        self.nodes[node.id] = node
        return node

    def add_edge(self, source: str, target: str, kind: EdgeKind) -> GraphEdge:
        edge = GraphEdge(source=source, target=target, kind=kind)
        self.edges.append(edge)
        return edge

    def build(self, projects: Iterable[ProjectRecord]) -> DependencyGraph:
        """Build a fresh graph snapshot.

        Args:
            projects: Parsed project records, in discovery order

        Returns:
            New DependencyGraph; an empty input yields the placeholder project
        """
        self.reset()
        records = list(projects)
        if not records:
            self.logger.warning("No projects found, substituting placeholder project")
            records = [create_placeholder_project()]

        for project in records:
            self._add_project(project)

        graph = DependencyGraph(
            nodes=list(self.nodes.values()), edges=list(self.edges), projects=records
        )
        dangling = graph.dangling_edges()
        if dangling:
            targets = ", ".join(sorted({edge.target for edge in dangling}))
            self.logger.warning(
                f"{len(dangling)} project references point outside the graph: {targets}"
            )

        self.logger.info(
            f"Built dependency graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges"
        )
        self.reset()
        return graph

    def _add_project(self, project: ProjectRecord) -> None:
        if not project.name:
            raise GraphError("Project record has no name", create_error_context(path=project.path))

        self.add_node(
            GraphNode(id=project.name, label=project.name, kind=NodeKind.PROJECT, path=project.path)
        )

        for package in project.package_references:
            node_id = package_node_id(package.name)
            self.add_node(
                GraphNode(
                    id=node_id, label=package.name, kind=NodeKind.PACKAGE, version=package.version
                )
            )
            self.add_edge(project.name, node_id, EdgeKind.PACKAGE_REF)

        for reference_path in project.project_references:
            self.add_edge(project.name, project_node_id(reference_path), EdgeKind.PROJECT_REF)

        for assembly in project.dependencies:
            node_id = assembly_node_id(assembly)
            self.add_node(GraphNode(id=node_id, label=assembly, kind=NodeKind.ASSEMBLY))
            self.add_edge(project.name, node_id, EdgeKind.ASSEMBLY_REF)


def build_dependency_graph(projects: Iterable[ProjectRecord]) -> DependencyGraph:
    """Convenience wrapper building a snapshot with a throwaway builder."""
    return DependencyGraphBuilder().build(projects)
