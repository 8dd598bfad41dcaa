"""
Core data models for the dependency graph toolkit using simple dataclasses.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import networkx as nx

from .exceptions import PROJECT_DESCRIPTOR_EXTENSIONS, LayoutError, create_error_context

PACKAGE_ID_PREFIX = "pkg-"
ASSEMBLY_ID_PREFIX = "asm-"
DEFAULT_OUTPUT_TYPE = "Library"
UNKNOWN_VERSION = "Unknown"


class NodeKind(str, Enum):
    """Kinds of participants in a dependency graph."""

    PROJECT = "project"
    PACKAGE = "package"
    ASSEMBLY = "assembly"


class EdgeKind(str, Enum):
    """Kinds of depends-on relations."""

    PROJECT_REF = "project-ref"
    PACKAGE_REF = "package-ref"
    ASSEMBLY_REF = "assembly-ref"


class SecurityStatus(str, Enum):
    """Security/freshness buckets, most severe first."""

    VULNERABLE = "vulnerable"
    DEPRECATED = "deprecated"
    OUTDATED = "outdated"
    SECURE = "secure"


@dataclass
class PackageReference:
    """A package declared by a project descriptor."""

    name: str
    version: str = UNKNOWN_VERSION

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "version": self.version}


@dataclass
class ProjectRecord:
    """Normalized view of one project descriptor."""

    name: str
    path: str
    output_type: str = DEFAULT_OUTPUT_TYPE
    package_references: list[PackageReference] = field(default_factory=list)
    project_references: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)  # assembly names

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "outputType": self.output_type,
            "packageReferences": [pkg.to_dict() for pkg in self.package_references],
            "projectReferences": list(self.project_references),
            "dependencies": list(self.dependencies),
        }


@dataclass
class GraphNode:
    """A node in the dependency graph. Identity is (kind, name)."""

    id: str
    label: str
    kind: NodeKind
    version: str | None = None
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "label": self.label, "type": self.kind.value}
        if self.version is not None:
            data["version"] = self.version
        if self.path is not None:
            data["path"] = self.path
        return data


@dataclass
class GraphEdge:
    """A directed consumer -> dependency edge."""

    source: str
    target: str
    kind: EdgeKind

    def to_dict(self) -> dict[str, str]:
        return {"from": self.source, "to": self.target, "type": self.kind.value}


@dataclass
class DependencyGraph:
    """One graph snapshot: ordered nodes, ordered edges and the source records."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    projects: list[ProjectRecord] = field(default_factory=list)

    def get_node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def has_node(self, node_id: str) -> bool:
        return self.get_node(node_id) is not None

    def nodes_of_kind(self, kind: NodeKind) -> list[GraphNode]:
        return [node for node in self.nodes if node.kind == kind]

    def dangling_edges(self) -> list[GraphEdge]:
        """Edges whose source or target has no node in this snapshot."""
        node_ids = {node.id for node in self.nodes}
        return [
            edge
            for edge in self.edges
            if edge.source not in node_ids or edge.target not in node_ids
        ]

    def statistics(self) -> dict[str, int]:
        """Summary counts used by reports and renderers."""
        return {
            "projects": len(self.projects),
            "nodes": len(self.nodes),
            "connections": len(self.edges),
            "project_nodes": len(self.nodes_of_kind(NodeKind.PROJECT)),
            "package_nodes": len(self.nodes_of_kind(NodeKind.PACKAGE)),
            "assembly_nodes": len(self.nodes_of_kind(NodeKind.ASSEMBLY)),
            "dangling_edges": len(self.dangling_edges()),
        }

    def to_networkx(self) -> nx.MultiDiGraph:
        """Convert to a NetworkX multigraph (parallel edges are preserved).

        Dangling edge endpoints become attribute-less nodes, which is how
        NetworkX treats edges to unknown nodes.
        """
        graph = nx.MultiDiGraph()
        for node in self.nodes:
            graph.add_node(
                node.id,
                label=node.label,
                type=node.kind.value,
                version=node.version,
                path=node.path,
            )
        for edge in self.edges:
            graph.add_edge(edge.source, edge.target, type=edge.kind.value)
        return graph

    def fan_counts(self) -> dict[str, tuple[int, int]]:
        """(fan-in, fan-out) edge counts per node, parallel edges included.

        A dangling project reference still counts toward its source's fan-out.
        """
        nx_graph = self.to_networkx()
        return {
            node.id: (nx_graph.in_degree(node.id), nx_graph.out_degree(node.id))
            for node in self.nodes
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "projects": [project.to_dict() for project in self.projects],
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }


@dataclass
class PackageClassification:
    """Classification of one (project, package) pair."""

    project_name: str
    package_name: str
    version: str
    issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "projectName": self.project_name,
            "packageName": self.package_name,
            "version": self.version,
            "issues": list(self.issues),
        }


@dataclass
class SecurityReport:
    """Four ordered buckets partitioning every (project, package) pair."""

    vulnerable: list[PackageClassification] = field(default_factory=list)
    deprecated: list[PackageClassification] = field(default_factory=list)
    outdated: list[PackageClassification] = field(default_factory=list)
    secure: list[PackageClassification] = field(default_factory=list)

    def bucket(self, status: SecurityStatus) -> list[PackageClassification]:
        return getattr(self, status.value)

    def counts(self) -> dict[str, int]:
        return {status.value: len(self.bucket(status)) for status in SecurityStatus}

    @property
    def total(self) -> int:
        return sum(self.counts().values())

    def status_for_package(self, package_name: str) -> SecurityStatus | None:
        """Most severe status recorded for a package name, or None if unseen."""
        for status in SecurityStatus:
            if any(item.package_name == package_name for item in self.bucket(status)):
                return status
        return None

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            status.value: [item.to_dict() for item in self.bucket(status)]
            for status in SecurityStatus
        }


@dataclass
class AnalysisResult:
    """Everything one analysis run hands to its consumer."""

    root: Path
    graph: DependencyGraph
    security: SecurityReport
    used_placeholder: bool = False
    skipped_descriptors: list[str] = field(default_factory=list)

    @property
    def solution_name(self) -> str:
        return self.root.name


@dataclass
class AnalysisConfig:
    """Configuration for descriptor discovery and parsing."""

    project_extensions: tuple[str, ...] = PROJECT_DESCRIPTOR_EXTENSIONS
    solution_extension: str = ".sln"
    excluded_directories: frozenset[str] = frozenset({"node_modules"})
    build_output_directories: tuple[str, ...] = ("bin", "obj")
    binary_extension: str = ".dll"


@dataclass
class LayoutConfig:
    """Configuration for the spring-embedder layout."""

    width: float = 1200.0
    height: float = 800.0
    margin: float = 50.0
    spawn_inset: float = 100.0
    iterations: int = 50
    repulsion: float = 50000.0
    attraction: float = 0.01
    damping: float = 0.9
    node_height: float = 40.0
    min_node_width: float = 120.0
    label_padding: float = 20.0
    glyph_width: float = 7.0
    seed: int | None = None

    def validate(self) -> None:
        """Raise LayoutError if the canvas cannot hold a minimum-size node."""
        context = create_error_context(width=self.width, height=self.height, margin=self.margin)
        if self.iterations < 0:
            raise LayoutError("Iteration count must not be negative", context)
        if self.inner_width < self.min_node_width or self.inner_height < self.node_height:
            raise LayoutError("Canvas is too small for a node box inside its margins", context)
        if self.spawn_inset < 0:
            raise LayoutError("Spawn inset must not be negative", context)

    @property
    def inner_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def inner_height(self) -> float:
        return self.height - 2 * self.margin

    def spawn_insets(self) -> tuple[float, float]:
        """Per-axis spawn inset, reduced on small canvases so a minimum box still fits."""
        return (
            min(self.spawn_inset, (self.width - self.min_node_width) / 2),
            min(self.spawn_inset, (self.height - self.node_height) / 2),
        )


@dataclass
class NodeLayout:
    """Ephemeral positional state of one node."""

    node_id: str
    label: str
    kind: NodeKind
    x: float
    y: float
    width: float
    height: float
    color: str
    vx: float = 0.0
    vy: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.node_id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "color": self.color,
        }


@dataclass
class GraphLayout:
    """Positional overlay built on top of a read-only graph snapshot."""

    nodes: list[NodeLayout]
    width: float
    height: float
    margin: float
    seed: int | None = None
    iterations: int = 0

    def get(self, node_id: str) -> NodeLayout | None:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def is_within_bounds(self, tolerance: float = 1e-6) -> bool:
        """True if every node box lies inside the canvas margins."""
        low = self.margin - tolerance
        return all(
            low <= node.x
            and node.x + node.width <= self.width - low
            and low <= node.y
            and node.y + node.height <= self.height - low
            for node in self.nodes
        )

    def move_node(self, node_id: str, x: float, y: float) -> NodeLayout:
        """Drag override for one node, kept inside the canvas margins."""
        node = self.get(node_id)
        if node is None:
            raise LayoutError("Unknown node", create_error_context(node_id=node_id))
        node.x = min(max(x, self.margin), self.width - node.width - self.margin)
        node.y = min(max(y, self.margin), self.height - node.height - self.margin)
        node.vx = node.vy = 0.0
        return node

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "margin": self.margin,
            "seed": self.seed,
            "iterations": self.iterations,
            "nodes": [node.to_dict() for node in self.nodes],
        }
