"""
Pytest configuration and shared fixtures for dependency graph toolkit tests.
"""

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from depgraph_toolkit.shared.models import PackageReference, ProjectRecord

SOLUTION_TEMPLATE = """Microsoft Visual Studio Solution File, Format Version 12.00
# Visual Studio Version 17
{projects}Global
EndGlobal
"""

PROJECT_LINE = (
    'Project("{{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}}") = "{name}", "{path}", '
    '"{{00000000-0000-0000-0000-00000000000{index}}}"\nEndProject\n'
)


def render_descriptor(
    output_type: str | None = None,
    packages: list[tuple[str, str | None]] | None = None,
    project_refs: list[str] | None = None,
    references: list[str] | None = None,
) -> str:
    """Render a minimal SDK-style descriptor."""
    lines = ['<Project Sdk="Microsoft.NET.Sdk">']
    if output_type:
        lines.append(f"  <PropertyGroup><OutputType>{output_type}</OutputType></PropertyGroup>")
    lines.append("  <ItemGroup>")
    for name, version in packages or []:
        if version is None:
            lines.append(f'    <PackageReference Include="{name}" />')
        else:
            lines.append(f'    <PackageReference Include="{name}" Version="{version}" />')
    for ref in project_refs or []:
        lines.append(f'    <ProjectReference Include="{ref}" />')
    for ref in references or []:
        lines.append(f'    <Reference Include="{ref}" />')
    lines.append("  </ItemGroup>")
    lines.append("</Project>")
    return "\n".join(lines) + "\n"


def render_solution(projects: list[tuple[str, str]]) -> str:
    """Render solution text registering (name, relative path) pairs."""
    body = "".join(
        PROJECT_LINE.format(name=name, path=path, index=index)
        for index, (name, path) in enumerate(projects, start=1)
    )
    return SOLUTION_TEMPLATE.format(projects=body)


@pytest.fixture
def make_descriptor() -> Callable[..., str]:
    """Return the descriptor renderer."""
    return render_descriptor


@pytest.fixture
def make_solution() -> Callable[[list[tuple[str, str]]], str]:
    """Return the solution renderer."""
    return render_solution


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_file(temp_dir: Path) -> Callable[[str, str], Path]:
    """Return a helper writing text files relative to the temporary directory."""

    def _write(relative_path: str, content: str = "") -> Path:
        path = temp_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_solution(temp_dir: Path, write_file) -> Path:
    """Two-project solution: App references Core, Core references a package.

    Returns the solution file path.
    """
    write_file(
        "App/App.csproj",
        render_descriptor(
            output_type="Exe",
            packages=[("Newtonsoft.Json", "12.0.0"), ("Serilog", "3.1.1")],
            project_refs=["..\\Core\\Core.csproj"],
            references=["System.Data"],
        ),
    )
    write_file(
        "Core/Core.csproj",
        render_descriptor(
            packages=[("Newtonsoft.Json", "13.0.3"), ("Microsoft.Owin", "4.2.2")],
        ),
    )
    return write_file(
        "Sample.sln",
        render_solution([("App", "App\\App.csproj"), ("Core", "Core\\Core.csproj")]),
    )


@pytest.fixture
def sample_projects() -> list[ProjectRecord]:
    """Records for project A referencing B, where B uses package P 1.0.0 and assembly Foo."""
    return [
        ProjectRecord(
            name="A",
            path="/src/A/A.csproj",
            project_references=["/src/B/B.csproj"],
        ),
        ProjectRecord(
            name="B",
            path="/src/B/B.csproj",
            package_references=[PackageReference("P", "1.0.0")],
            dependencies=["Foo"],
        ),
    ]
