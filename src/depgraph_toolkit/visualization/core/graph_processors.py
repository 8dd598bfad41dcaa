"""
Shared styling rules for graph rendering.

Colours, shapes and tooltips are derived from node kind and, for packages, the
security classification, so every layout and export uses the same scheme.
"""

from ...shared.models import (
    EdgeKind,
    GraphNode,
    NodeKind,
    SecurityReport,
    SecurityStatus,
)

DEFAULT_NODE_COLOR = "#999999"
DEFAULT_EDGE_COLOR = "#666666"


class GraphStyler:
    """Maps graph entities to render attributes."""

    def __init__(self, security: SecurityReport | None = None):
        self.security = security

        self.node_colors: dict[NodeKind, str] = {
            NodeKind.PROJECT: "#4CAF50",  # Green
            NodeKind.PACKAGE: "#2196F3",  # Blue
            NodeKind.ASSEMBLY: "#FF9800",  # Orange
        }
        self.status_colors: dict[SecurityStatus, str] = {
            SecurityStatus.VULNERABLE: "#f14c4c",  # Red
            SecurityStatus.DEPRECATED: "#ff8c00",  # Dark orange
            SecurityStatus.OUTDATED: "#ffcc02",  # Yellow
        }
        self.edge_colors: dict[EdgeKind, str] = {
            EdgeKind.PROJECT_REF: "#4CAF50",
            EdgeKind.PACKAGE_REF: "#2196F3",
            EdgeKind.ASSEMBLY_REF: "#FF9800",
        }
        self.node_shapes: dict[NodeKind, str] = {
            NodeKind.PROJECT: "box",
            NodeKind.PACKAGE: "ellipse",
            NodeKind.ASSEMBLY: "diamond",
        }
        self.status_flags: dict[SecurityStatus, str] = {
            SecurityStatus.VULNERABLE: "SECURITY VULNERABILITY",
            SecurityStatus.DEPRECATED: "DEPRECATED PACKAGE",
            SecurityStatus.OUTDATED: "OUTDATED VERSION",
        }

    def security_status(self, node: GraphNode) -> SecurityStatus | None:
        """Classification that applies to a node; only package nodes carry one."""
        if self.security is None or node.kind != NodeKind.PACKAGE:
            return None
        return self.security.status_for_package(node.label)

    def node_color(self, node: GraphNode) -> str:
        status = self.security_status(node)
        if status in self.status_colors:
            return self.status_colors[status]
        return self.node_colors.get(node.kind, DEFAULT_NODE_COLOR)

    def edge_color(self, kind: EdgeKind) -> str:
        return self.edge_colors.get(kind, DEFAULT_EDGE_COLOR)

    def node_shape(self, node: GraphNode) -> str:
        return self.node_shapes.get(node.kind, "dot")

    def node_tooltip(self, node: GraphNode) -> str:
        lines = [f"Type: {node.kind.value}", f"Name: {node.label}"]
        if node.version:
            lines.append(f"Version: {node.version}")
        if node.path:
            lines.append(f"Path: {node.path}")

        status = self.security_status(node)
        if status in self.status_flags:
            lines.append(self.status_flags[status])
        return "\n".join(lines)
