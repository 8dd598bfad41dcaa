"""
Tests for end-to-end solution analysis.
"""

from pathlib import Path

from depgraph_toolkit.pipeline.analyzer import DependencyAnalyzer, analyze_solution
from depgraph_toolkit.shared.logging import ProgressLogger
from depgraph_toolkit.shared.models import EdgeKind, NodeKind


class TestDependencyAnalyzer:
    """Tests for DependencyAnalyzer.analyze."""

    def test_sample_solution(self, sample_solution: Path) -> None:
        result = analyze_solution(sample_solution)

        assert result.solution_name == "Sample.sln"
        assert not result.used_placeholder
        assert [project.name for project in result.graph.projects] == ["App", "Core"]

        graph = result.graph
        assert graph.get_node("App").kind == NodeKind.PROJECT
        assert graph.get_node("pkg-Newtonsoft.Json").version == "12.0.0"
        assert graph.has_node("asm-System.Data")
        assert ("App", "Core", EdgeKind.PROJECT_REF) in [
            (edge.source, edge.target, edge.kind) for edge in graph.edges
        ]
        assert graph.dangling_edges() == []

    def test_security_uses_declared_versions(self, sample_solution: Path) -> None:
        report = analyze_solution(sample_solution).security

        # Node keeps the first version, but each pair is classified with its own
        assert [(c.project_name, c.version) for c in report.vulnerable] == [("App", "12.0.0")]
        assert [c.package_name for c in report.deprecated] == ["Microsoft.Owin"]
        assert {c.package_name for c in report.secure} == {"Serilog", "Newtonsoft.Json"}
        assert report.total == 4

    def test_empty_directory_uses_placeholder(self, temp_dir: Path) -> None:
        result = analyze_solution(temp_dir)

        assert result.used_placeholder
        projects = result.graph.nodes_of_kind(NodeKind.PROJECT)
        assert [node.label for node in projects] == ["SampleProject"]
        assert len(result.graph.nodes) > 0
        assert result.security.total == 2

    def test_missing_root_uses_placeholder(self, temp_dir: Path) -> None:
        result = analyze_solution(temp_dir / "missing.sln")
        assert result.used_placeholder

    def test_unreadable_descriptor_is_skipped(
        self, temp_dir: Path, write_file, make_descriptor
    ) -> None:
        write_file("Good/Good.csproj", make_descriptor(packages=[("Serilog", "3.1.1")]))
        broken = write_file("Bad/Bad.csproj", "<Project><ItemGroup>")

        result = analyze_solution(temp_dir)

        assert [project.name for project in result.graph.projects] == ["Good"]
        assert result.skipped_descriptors == [str(broken)]
        assert not result.used_placeholder

    def test_only_unreadable_descriptors_gives_placeholder(
        self, temp_dir: Path, write_file
    ) -> None:
        write_file("Bad/Bad.csproj", "not xml at all")
        result = analyze_solution(temp_dir)
        assert result.used_placeholder
        assert len(result.skipped_descriptors) == 1

    def test_registered_but_missing_project_is_skipped(
        self, temp_dir: Path, write_file, make_descriptor, make_solution
    ) -> None:
        write_file("Real/Real.csproj", make_descriptor())
        solution = write_file(
            "Mixed.sln",
            make_solution([("Real", "Real\\Real.csproj"), ("Gone", "Gone\\Gone.csproj")]),
        )

        result = analyze_solution(solution)

        assert [project.name for project in result.graph.projects] == ["Real"]
        assert result.skipped_descriptors[0].endswith("Gone.csproj")

    def test_progress_logger(self, sample_solution: Path) -> None:
        progress = ProgressLogger(use_rich=False)
        result = DependencyAnalyzer(progress=progress).analyze(sample_solution)
        assert len(result.graph.projects) == 2

    def test_repeated_analysis_is_independent(self, sample_solution: Path, temp_dir: Path) -> None:
        analyzer = DependencyAnalyzer()
        first = analyzer.analyze(sample_solution)
        second = analyzer.analyze(temp_dir / "App")

        assert len(first.graph.projects) == 2
        assert [project.name for project in second.graph.projects] == ["App"]
        assert not second.graph.has_node("pkg-Microsoft.Owin")

    def test_reference_scenario_on_disk(self, temp_dir: Path, write_file, make_descriptor) -> None:
        write_file("A/A.csproj", make_descriptor(project_refs=["..\\B\\B.csproj"]))
        write_file(
            "B/B.csproj", make_descriptor(packages=[("P", "1.0.0")], references=["Foo"])
        )

        result = analyze_solution(temp_dir)

        graph = result.graph
        assert [node.id for node in graph.nodes] == ["A", "B", "pkg-P", "asm-Foo"]
        assert [(e.source, e.target, e.kind) for e in graph.edges] == [
            ("A", "B", EdgeKind.PROJECT_REF),
            ("B", "pkg-P", EdgeKind.PACKAGE_REF),
            ("B", "asm-Foo", EdgeKind.ASSEMBLY_REF),
        ]
        assert [c.package_name for c in result.security.outdated] == ["P"]
        assert result.security.total == 1

    def test_same_named_descriptors_share_a_node(
        self, temp_dir: Path, write_file, make_descriptor
    ) -> None:
        first = write_file("X/Core.csproj", make_descriptor(packages=[("P", "4.0.0")]))
        write_file("Y/Core.csproj", make_descriptor(packages=[("Q", "5.0.0")]))

        graph = analyze_solution(temp_dir).graph

        assert [node.id for node in graph.nodes] == ["Core", "pkg-P", "pkg-Q"]
        assert graph.get_node("Core").path == str(first)
        assert len(graph.projects) == 2
