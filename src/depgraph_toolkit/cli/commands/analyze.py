"""
Analysis commands for the dependency graph toolkit CLI.
"""

import sys
from pathlib import Path

import click
from rich.table import Table

from ...graph.builder import project_node_id
from ...pipeline.analyzer import DependencyAnalyzer
from ...shared.exceptions import DepGraphToolkitError, create_error_context, wrap_external_error
from ...shared.logging import ProgressLogger
from ...shared.models import AnalysisResult, SecurityStatus
from ...shared.output import OutputManager
from ...visualization.core.data_transformer import GraphSnapshotTransformer
from ..output import CLIOutputManager
from ..utils import get_cli_flags, get_output_manager_from_context

STATUS_STYLES = {
    SecurityStatus.VULNERABLE: "red",
    SecurityStatus.DEPRECATED: "dark_orange",
    SecurityStatus.OUTDATED: "yellow",
    SecurityStatus.SECURE: "green",
}


def run_analysis(ctx: click.Context, root: Path) -> AnalysisResult:
    """Run the analyzer with progress output unless --quiet is set."""
    flags = get_cli_flags(ctx)
    progress = None if flags.get("quiet") else ProgressLogger()
    return DependencyAnalyzer(progress=progress).analyze(root)


def render_summary(output: CLIOutputManager, result: AnalysisResult) -> None:
    stats = result.graph.statistics()

    table = Table(title=f"Dependency graph: {result.solution_name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Projects", str(stats["projects"]))
    table.add_row("Dependencies", str(stats["nodes"]))
    table.add_row("Connections", str(stats["connections"]))
    table.add_row("Packages", str(stats["package_nodes"]))
    table.add_row("Assemblies", str(stats["assembly_nodes"]))
    if stats["dangling_edges"]:
        table.add_row("Unresolved project references", str(stats["dangling_edges"]))
    output.table(table)

    counts = result.security.counts()
    security_table = Table(title="Security summary")
    security_table.add_column("Status")
    security_table.add_column("Packages", justify="right")
    for status in SecurityStatus:
        security_table.add_row(
            f"[{STATUS_STYLES[status]}]{status.value}[/]", str(counts[status.value])
        )
    output.table(security_table)

    if result.used_placeholder:
        output.warning("No projects found; showing the sample placeholder project")
    for skipped in result.skipped_descriptors:
        output.warning(f"Skipped unreadable descriptor: {skipped}")


def render_project_details(output: CLIOutputManager, result: AnalysisResult) -> None:
    for project in result.graph.projects:
        table = Table(title=f"{project.name} ({project.output_type})")
        table.add_column("Kind", style="cyan")
        table.add_column("Name")
        table.add_column("Version")
        for package in project.package_references:
            table.add_row("package", package.name, package.version)
        for reference in project.project_references:
            table.add_row("project", project_node_id(reference), "")
        for assembly in project.dependencies:
            table.add_row("assembly", assembly, "")
        output.table(table)


@click.command()
@click.argument("root", type=click.Path(path_type=Path))
@click.option("--details", is_flag=True, help="Show per-project reference tables")
@click.option(
    "--json",
    "json_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the graph snapshot to a JSON file",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Write the snapshot under this directory's reports/ folder (ignored with --json)",
)
@click.option("--no-cache", is_flag=True, help="Use a fixed report filename, no timestamp")
@click.pass_context
def analyze(ctx, root, details, json_path, output_dir, no_cache):
    """Analyze a solution file or directory and summarize its dependency graph."""
    logger = ctx.obj["logger"]
    output = get_output_manager_from_context(ctx)

    try:
        result = run_analysis(ctx, root)
        render_summary(output, result)
        if details:
            render_project_details(output, result)

        if json_path is None and output_dir is not None:
            json_path = OutputManager(output_dir).get_report_path(root, no_cache=no_cache)

        if json_path is not None:
            transformer = GraphSnapshotTransformer()
            written = transformer.write_payload(transformer.build_payload(result), json_path)
            output.success(f"Graph snapshot written: {written}")

        logger.info(f"Analysis completed for {root}")

    except DepGraphToolkitError as e:
        logger.error(f"Analysis failed: {e}")
        output.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        error = wrap_external_error(e, create_error_context(root=root))
        logger.error(f"Unexpected error: {error}")
        output.error(str(error))
        sys.exit(1)


@click.command()
@click.argument("root", type=click.Path(path_type=Path))
@click.pass_context
def security(ctx, root):
    """Classify every package reference of a solution by security status."""
    logger = ctx.obj["logger"]
    output = get_output_manager_from_context(ctx)

    try:
        result = run_analysis(ctx, root)
        report = result.security

        for status in SecurityStatus:
            entries = report.bucket(status)
            table = Table(title=f"{status.value.capitalize()} ({len(entries)})")
            table.add_column("Project", style="cyan")
            table.add_column("Package")
            table.add_column("Version")
            table.add_column("Issues", style=STATUS_STYLES[status])
            for entry in entries:
                table.add_row(
                    entry.project_name,
                    entry.package_name,
                    entry.version,
                    "; ".join(entry.issues),
                )
            output.table(table)

        if report.vulnerable:
            output.warning(f"{len(report.vulnerable)} vulnerable package references found")
        else:
            output.success("No known vulnerable packages")

    except DepGraphToolkitError as e:
        logger.error(f"Security classification failed: {e}")
        output.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        error = wrap_external_error(e, create_error_context(root=root))
        logger.error(f"Unexpected error: {error}")
        output.error(str(error))
        sys.exit(1)
