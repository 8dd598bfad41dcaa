"""
Data transformation utilities for dependency graph rendering.

Turns an analysis result (and optionally a layout) into the pure-data snapshot
a renderer or report template consumes. Nothing here draws anything.
"""

import json
import logging
from pathlib import Path
from typing import Any

from ...shared.exceptions import ProcessingError, create_error_context
from ...shared.models import AnalysisResult, GraphLayout, ProjectRecord
from .graph_processors import GraphStyler


class GraphSnapshotTransformer:
    """Builds JSON-ready render payloads from analysis results."""

    def __init__(self):
        """Initialize the data transformer."""
        self.logger = logging.getLogger(__name__)

    def build_payload(
        self, result: AnalysisResult, layout: GraphLayout | None = None
    ) -> dict[str, Any]:
        """Build the render payload.

        Args:
            result: Analysis result to export
            layout: Optional positional overlay for the same graph

        Returns:
            Dictionary with statistics, security buckets, styled nodes and edges
            and per-project details
        """
        graph = result.graph
        styler = GraphStyler(result.security)
        boxes = {node.node_id: node for node in layout.nodes} if layout else {}
        fan_counts = graph.fan_counts()

        nodes = []
        for node in graph.nodes:
            node_data = node.to_dict()
            status = styler.security_status(node)
            node_data.update(
                {
                    "color": styler.node_color(node),
                    "shape": styler.node_shape(node),
                    "tooltip": styler.node_tooltip(node),
                    "securityStatus": status.value if status else None,
                    "fanIn": fan_counts[node.id][0],
                    "fanOut": fan_counts[node.id][1],
                }
            )
            box = boxes.get(node.id)
            if box is not None:
                node_data.update({"x": box.x, "y": box.y, "width": box.width, "height": box.height})
            nodes.append(node_data)

        edges = []
        for edge in graph.edges:
            edge_data = edge.to_dict()
            edge_data["color"] = styler.edge_color(edge.kind)
            edges.append(edge_data)

        payload: dict[str, Any] = {
            "solution": result.solution_name,
            "root": str(result.root),
            "usedPlaceholder": result.used_placeholder,
            "skippedDescriptors": list(result.skipped_descriptors),
            "statistics": graph.statistics(),
            "security": {
                "summary": result.security.counts(),
                "buckets": result.security.to_dict(),
            },
            "nodes": nodes,
            "edges": edges,
            "projects": [self.project_details(project) for project in graph.projects],
        }
        if layout is not None:
            payload["layout"] = {
                "width": layout.width,
                "height": layout.height,
                "margin": layout.margin,
                "seed": layout.seed,
                "iterations": layout.iterations,
            }

        self.logger.debug(f"Built render payload: {len(nodes)} nodes, {len(edges)} edges")
        return payload

    def project_details(self, project: ProjectRecord) -> dict[str, Any]:
        """Per-project detail record as shown in summary tables."""
        details = project.to_dict()
        details["counts"] = {
            "packages": len(project.package_references),
            "projectReferences": len(project.project_references),
            "assemblies": len(project.dependencies),
        }
        return details

    def write_payload(self, payload: dict[str, Any], output_path: Path) -> Path:
        """Write a payload as JSON.

        Args:
            payload: Payload from build_payload
            output_path: Destination file

        Returns:
            The written path

        Raises:
            ProcessingError: If the file cannot be written
        """
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            raise ProcessingError(
                f"Failed to write graph snapshot: {e}",
                create_error_context(output_path=str(output_path)),
            ) from e

        self.logger.info(f"Wrote graph snapshot to {output_path}")
        return output_path
