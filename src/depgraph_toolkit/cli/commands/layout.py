"""
Layout command for the dependency graph toolkit CLI.
"""

import sys
from pathlib import Path

import click

from ...shared.exceptions import DepGraphToolkitError, create_error_context, wrap_external_error
from ...shared.models import LayoutConfig
from ...shared.output import OutputManager
from ...visualization.core.data_transformer import GraphSnapshotTransformer
from ...visualization.engines.force_directed_engine import ForceDirectedEngine
from ..utils import get_output_manager_from_context
from .analyze import run_analysis


@click.command()
@click.argument("root", type=click.Path(path_type=Path))
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Snapshot file (default: organized path under --output-dir)",
)
@click.option("--output-dir", default="outputs", help="Base directory for organized outputs")
@click.option("--no-cache", is_flag=True, help="Use a fixed filename instead of a timestamped one")
@click.option("--width", type=float, default=1200.0, show_default=True, help="Canvas width")
@click.option("--height", type=float, default=800.0, show_default=True, help="Canvas height")
@click.option("--iterations", type=int, default=50, show_default=True, help="Relaxation passes")
@click.option("--seed", type=int, help="Random seed for reproducible layouts")
@click.pass_context
def layout(ctx, root, output_path, output_dir, no_cache, width, height, iterations, seed):
    """Compute a force-directed layout and write the render snapshot as JSON."""
    logger = ctx.obj["logger"]
    output = get_output_manager_from_context(ctx)

    try:
        engine = ForceDirectedEngine(
            LayoutConfig(width=width, height=height, iterations=iterations, seed=seed)
        )
        result = run_analysis(ctx, root)
        graph_layout = engine.compute_layout(result.graph, result.security)

        if output_path is None:
            output_path = OutputManager(Path(output_dir)).get_layout_path(root, no_cache=no_cache)

        transformer = GraphSnapshotTransformer()
        payload = transformer.build_payload(result, graph_layout)
        written = transformer.write_payload(payload, output_path)

        output.success(f"Layout written: {written}")
        output.debug(f"Layout seed: {graph_layout.seed}")
        logger.info(f"Layout created for {root} at {written}")

    except DepGraphToolkitError as e:
        logger.error(f"Layout failed: {e}")
        output.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        error = wrap_external_error(e, create_error_context(root=root))
        logger.error(f"Unexpected error: {error}")
        output.error(str(error))
        sys.exit(1)
