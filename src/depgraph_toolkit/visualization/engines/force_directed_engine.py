"""
Force-directed layout engine for dependency graph visualization.

A classic spring embedder: every pair of nodes repels, every edge acts as a
spring, and a fixed number of damped relaxation passes produce the positions.
Each pass costs O(n^2) because of the pairwise repulsion term, which is fine
for the tens-to-low-hundreds of nodes a solution graph has.
"""

import logging
from collections.abc import Iterator

import numpy as np

from ...shared.models import (
    DependencyGraph,
    GraphLayout,
    LayoutConfig,
    NodeLayout,
    SecurityReport,
)
from ..core.graph_processors import GraphStyler


class ForceDirectedEngine:
    """Engine computing spring-embedder positions for a graph snapshot."""

    def __init__(self, config: LayoutConfig | None = None):
        """Initialize the force-directed engine.

        Args:
            config: Layout configuration (validated here)

        Raises:
            LayoutError: If the canvas cannot hold a node box
        """
        self.logger = logging.getLogger(__name__)
        self.config = config or LayoutConfig()
        self.config.validate()

    def box_width(self, label: str) -> float:
        """Approximate rendered box width for a label, capped to the canvas."""
        cfg = self.config
        width = max(len(label) * cfg.glyph_width + cfg.label_padding, cfg.min_node_width)
        return min(width, cfg.inner_width)

    def compute_layout(
        self,
        graph: DependencyGraph,
        security: SecurityReport | None = None,
        seed: int | None = None,
    ) -> GraphLayout:
        """Lay out a graph snapshot.

        Args:
            graph: Graph snapshot (not modified)
            security: Optional classification used for node colours
            seed: Random seed; defaults to the configured seed, or a fresh one

        Returns:
            Positional overlay with one NodeLayout per graph node
        """
        if seed is None:
            seed = self.config.seed if self.config.seed is not None else self._fresh_seed()

        positions = velocities = widths = None
        for positions, velocities, widths in self.iter_relaxation(graph, seed):
            pass

        styler = GraphStyler(security)
        nodes = []
        if positions is not None:
            for index, node in enumerate(graph.nodes):
                nodes.append(
                    NodeLayout(
                        node_id=node.id,
                        label=node.label,
                        kind=node.kind,
                        x=float(positions[index, 0]),
                        y=float(positions[index, 1]),
                        width=float(widths[index]),
                        height=self.config.node_height,
                        color=styler.node_color(node),
                        vx=float(velocities[index, 0]),
                        vy=float(velocities[index, 1]),
                    )
                )

        self.logger.info(
            f"Computed force-directed layout: {len(nodes)} nodes, "
            f"{self.config.iterations} passes (seed={seed})"
        )
        return GraphLayout(
            nodes=nodes,
            width=self.config.width,
            height=self.config.height,
            margin=self.config.margin,
            seed=seed,
            iterations=self.config.iterations,
        )

    def reset(
        self,
        graph: DependencyGraph,
        security: SecurityReport | None = None,
        seed: int | None = None,
    ) -> GraphLayout:
        """Re-run the whole procedure, from a fresh random seed unless one is given.

        Unlike compute_layout, the configured seed is ignored.
        """
        if seed is None:
            seed = self._fresh_seed()
        return self.compute_layout(graph, security, seed=seed)

    def iter_relaxation(
        self, graph: DependencyGraph, seed: int
    ) -> Iterator[tuple[np.ndarray, np.ndarray, np.ndarray]]:
        """Yield (positions, velocities, widths) once initialized and after every pass.

        The arrays are live state; copy them if they must outlive the next step.
        """
        cfg = self.config
        rng = np.random.default_rng(seed)
        count = len(graph.nodes)

        widths = np.array([self.box_width(node.label) for node in graph.nodes], dtype=float)
        inset = np.array(cfg.spawn_insets(), dtype=float)
        spawn_size = np.array([cfg.width, cfg.height], dtype=float) - 2 * inset
        positions = rng.random((count, 2)) * spawn_size + inset
        velocities = np.zeros((count, 2), dtype=float)

        lower = np.full((count, 2), cfg.margin, dtype=float)
        upper = np.column_stack(
            [
                cfg.width - widths - cfg.margin,
                np.full(count, cfg.height - cfg.node_height - cfg.margin),
            ]
        )
        sources, targets = self._edge_indices(graph)

        yield positions, velocities, widths

        for _ in range(cfg.iterations):
            velocities += self._repulsion_forces(positions)
            velocities += self._attraction_forces(positions, sources, targets)
            velocities *= cfg.damping
            positions += velocities
            np.clip(positions, lower, upper, out=positions)
            yield positions, velocities, widths

    def _repulsion_forces(self, positions: np.ndarray) -> np.ndarray:
        if len(positions) < 2:
            return np.zeros_like(positions)

        delta = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
        distance = np.maximum(np.sqrt((delta**2).sum(axis=-1)), 1.0)
        magnitude = self.config.repulsion / distance**2
        np.fill_diagonal(magnitude, 0.0)
        return (delta / distance[..., np.newaxis] * magnitude[..., np.newaxis]).sum(axis=1)

    def _attraction_forces(
        self, positions: np.ndarray, sources: np.ndarray, targets: np.ndarray
    ) -> np.ndarray:
        forces = np.zeros_like(positions)
        if sources.size == 0:
            return forces

        delta = positions[targets] - positions[sources]
        distance = np.maximum(np.linalg.norm(delta, axis=1), 1.0)
        magnitude = distance * self.config.attraction
        pull = delta / distance[:, np.newaxis] * magnitude[:, np.newaxis]

        # Parallel edges each pull once
        np.add.at(forces, sources, pull)
        np.add.at(forces, targets, -pull)
        return forces

    def _edge_indices(self, graph: DependencyGraph) -> tuple[np.ndarray, np.ndarray]:
        index = {node.id: position for position, node in enumerate(graph.nodes)}
        sources, targets = [], []
        skipped = 0
        for edge in graph.edges:
            if edge.source in index and edge.target in index:
                sources.append(index[edge.source])
                targets.append(index[edge.target])
            else:
                skipped += 1

        if skipped:
            self.logger.debug(f"Ignoring {skipped} dangling edges in layout")
        return np.array(sources, dtype=int), np.array(targets, dtype=int)

    @staticmethod
    def _fresh_seed() -> int:
        return int(np.random.default_rng().integers(0, 2**32))
