"""
Tests for project descriptor parsing.
"""

import os
from pathlib import Path

import pytest

from depgraph_toolkit.pipeline.descriptor import DescriptorDocument, DescriptorParser, local_name
from depgraph_toolkit.shared.exceptions import DescriptorReadError

LEGACY_DESCRIPTOR = """<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="15.0" xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
  <PropertyGroup>
    <OutputType>WinExe</OutputType>
  </PropertyGroup>
  <ItemGroup>
    <Reference Include="System" />
    <Reference Include="System.Xml" />
  </ItemGroup>
  <ItemGroup>
    <PackageReference Include="Dapper">
      <Version>2.0.123</Version>
    </PackageReference>
  </ItemGroup>
</Project>
"""


class TestDescriptorDocument:
    """Tests for the typed intermediate schema."""

    def test_local_name_strips_namespace(self) -> None:
        assert local_name("{http://schemas.microsoft.com/developer/msbuild/2003}Project") == (
            "Project"
        )
        assert local_name("ItemGroup") == "ItemGroup"

    def test_namespaced_document(self) -> None:
        document = DescriptorDocument.from_string(LEGACY_DESCRIPTOR)
        assert document.property_groups[0].output_type == "WinExe"
        assert [ref.include for ref in document.item_groups[0].references] == [
            "System",
            "System.Xml",
        ]
        assert document.item_groups[1].package_references[0].version == "2.0.123"

    def test_unexpected_root_gives_empty_document(self) -> None:
        document = DescriptorDocument.from_string("<Solution><ItemGroup /></Solution>")
        assert document.property_groups == []
        assert document.item_groups == []


class TestDescriptorParser:
    """Tests for DescriptorParser.parse."""

    def test_parses_all_reference_kinds(self, temp_dir: Path, write_file, make_descriptor) -> None:
        path = write_file(
            "src/App/App.csproj",
            make_descriptor(
                output_type="Exe",
                packages=[("Serilog", "3.1.1"), ("Polly", None)],
                project_refs=["..\\Core\\Core.csproj", "..\\Data\\Data.csproj"],
                references=["System.Data"],
            ),
        )

        record = DescriptorParser().parse(path)

        assert record.name == "App"
        assert record.path == str(path)
        assert record.output_type == "Exe"
        assert [(p.name, p.version) for p in record.package_references] == [
            ("Serilog", "3.1.1"),
            ("Polly", "Unknown"),
        ]
        assert record.project_references == [
            os.path.normpath(str(temp_dir / "src" / "Core" / "Core.csproj")),
            os.path.normpath(str(temp_dir / "src" / "Data" / "Data.csproj")),
        ]
        assert record.dependencies == ["System.Data"]

    def test_output_type_defaults_to_library(self, write_file, make_descriptor) -> None:
        record = DescriptorParser().parse(write_file("Lib/Lib.fsproj", make_descriptor()))
        assert record.output_type == "Library"
        assert record.name == "Lib"

    def test_version_child_element(self, write_file) -> None:
        record = DescriptorParser().parse(write_file("Legacy/Legacy.csproj", LEGACY_DESCRIPTOR))
        assert record.output_type == "WinExe"
        assert record.package_references[0].name == "Dapper"
        assert record.package_references[0].version == "2.0.123"
        assert record.dependencies == ["System", "System.Xml"]

    def test_duplicate_project_references_are_kept(self, write_file, make_descriptor) -> None:
        path = write_file(
            "A/A.csproj",
            make_descriptor(project_refs=["..\\B\\B.csproj", "..\\B\\B.csproj"]),
        )
        record = DescriptorParser().parse(path)
        assert len(record.project_references) == 2

    def test_malformed_xml_raises(self, write_file) -> None:
        path = write_file("Broken/Broken.csproj", "<Project><ItemGroup></Project>")
        with pytest.raises(DescriptorReadError) as exc_info:
            DescriptorParser().parse(path)
        assert "Broken.csproj" in str(exc_info.value)

    def test_missing_file_raises(self, temp_dir: Path) -> None:
        with pytest.raises(DescriptorReadError):
            DescriptorParser().parse(temp_dir / "Nope" / "Nope.csproj")

    def test_failing_step_does_not_discard_record(
        self, write_file, make_descriptor, monkeypatch
    ) -> None:
        path = write_file(
            "App/App.csproj",
            make_descriptor(packages=[("Serilog", "3.1.1")], references=["System.Data"]),
        )
        parser = DescriptorParser()

        def explode(document):
            raise ValueError("bad package element")

        monkeypatch.setattr(parser, "extract_package_references", explode)
        record = parser.parse(path)

        assert record.package_references == []
        assert record.dependencies == ["System.Data"]


class TestCompiledDependencies:
    """Tests for implicit assemblies found in build output directories."""

    def test_binaries_in_bin_and_obj(self, write_file, make_descriptor) -> None:
        path = write_file("App/App.csproj", make_descriptor(references=["System.Data"]))
        write_file("App/bin/Debug/net8.0/Serilog.dll")
        write_file("App/bin/Debug/net8.0/App.pdb")
        write_file("App/obj/Debug/Helpers.DLL")

        record = DescriptorParser().parse(path)
        assert record.dependencies == ["System.Data", "Serilog", "Helpers"]

    def test_binary_names_are_not_duplicated(self, write_file, make_descriptor) -> None:
        path = write_file("App/App.csproj", make_descriptor(references=["Serilog"]))
        write_file("App/bin/Debug/Serilog.dll")
        write_file("App/bin/Release/Serilog.dll")

        record = DescriptorParser().parse(path)
        assert record.dependencies == ["Serilog"]

    def test_no_build_output(self, write_file, make_descriptor) -> None:
        record = DescriptorParser().parse(write_file("App/App.csproj", make_descriptor()))
        assert record.dependencies == []
