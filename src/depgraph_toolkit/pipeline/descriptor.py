"""
Project descriptor parsing.

Descriptors are MSBuild-style XML documents::

    <Project>
      <PropertyGroup><OutputType>Exe</OutputType></PropertyGroup>
      <ItemGroup>
        <PackageReference Include="Serilog" Version="3.1.1" />
        <ProjectReference Include="..\\Core\\Core.csproj" />
        <Reference Include="System.Data" />
      </ItemGroup>
    </Project>

The raw XML is converted once into a small typed schema (``DescriptorDocument``)
and every extraction step works from that schema. Steps are isolated from each
other: a failing step is logged and contributes nothing, the rest of the
descriptor is still used.
"""

import logging
import os
import xml.etree.ElementTree as ET
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..shared.exceptions import DescriptorReadError, create_error_context
from ..shared.models import (
    DEFAULT_OUTPUT_TYPE,
    UNKNOWN_VERSION,
    AnalysisConfig,
    PackageReference,
    ProjectRecord,
)

logger = logging.getLogger(__name__)


def local_name(tag: str) -> str:
    """Strip an XML namespace (``{uri}Tag`` -> ``Tag``)."""
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def _child_text(element: ET.Element, name: str) -> str | None:
    for child in element:
        if local_name(child.tag) == name:
            text = (child.text or "").strip()
            return text or None
    return None


@dataclass
class ReferenceElement:
    """An item element such as PackageReference, ProjectReference or Reference."""

    include: str | None = None
    version: str | None = None

    @classmethod
    def from_element(cls, element: ET.Element) -> "ReferenceElement":
        include = element.get("Include")
        version = element.get("Version") or _child_text(element, "Version")
        return cls(include=include.strip() if include else None, version=version)


@dataclass
class PropertyGroup:
    output_type: str | None = None

    @classmethod
    def from_element(cls, element: ET.Element) -> "PropertyGroup":
        return cls(output_type=_child_text(element, "OutputType"))


@dataclass
class ItemGroup:
    package_references: list[ReferenceElement] = field(default_factory=list)
    project_references: list[ReferenceElement] = field(default_factory=list)
    references: list[ReferenceElement] = field(default_factory=list)

    @classmethod
    def from_element(cls, element: ET.Element) -> "ItemGroup":
        group = cls()
        targets = {
            "PackageReference": group.package_references,
            "ProjectReference": group.project_references,
            "Reference": group.references,
        }
        for child in element:
            target = targets.get(local_name(child.tag))
            if target is not None:
                target.append(ReferenceElement.from_element(child))
        return group


@dataclass
class DescriptorDocument:
    """Typed intermediate form of a descriptor document."""

    property_groups: list[PropertyGroup] = field(default_factory=list)
    item_groups: list[ItemGroup] = field(default_factory=list)

    @classmethod
    def from_root(cls, root: ET.Element) -> "DescriptorDocument":
        document = cls()
        if local_name(root.tag) != "Project":
            logger.warning(f"Unexpected descriptor root element <{local_name(root.tag)}>")
            return document

        for child in root:
            name = local_name(child.tag)
            if name == "PropertyGroup":
                document.property_groups.append(PropertyGroup.from_element(child))
            elif name == "ItemGroup":
                document.item_groups.append(ItemGroup.from_element(child))
        return document

    @classmethod
    def from_string(cls, content: str) -> "DescriptorDocument":
        return cls.from_root(ET.fromstring(content))


class DescriptorParser:
    """Parses project descriptors into ProjectRecord objects."""

    def __init__(self, config: AnalysisConfig | None = None):
        self.config = config or AnalysisConfig()
        self.logger = logging.getLogger(__name__)

    def parse(self, descriptor_path: Path) -> ProjectRecord:
        """Parse one descriptor.

        Args:
            descriptor_path: Path to a .csproj/.vbproj/.fsproj file

        Returns:
            Normalized project record

        Raises:
            DescriptorReadError: If the file cannot be read or is not well-formed XML
        """
        descriptor_path = Path(os.path.abspath(descriptor_path))
        document = self.load_document(descriptor_path)
        return self.build_record(document, descriptor_path)

    def load_document(self, descriptor_path: Path) -> DescriptorDocument:
        context = create_error_context(descriptor_path=str(descriptor_path))
        try:
            tree = ET.parse(descriptor_path)
        except OSError as e:
            raise DescriptorReadError(f"Cannot read descriptor: {e}", context) from e
        except ET.ParseError as e:
            raise DescriptorReadError(f"Malformed descriptor XML: {e}", context) from e
        return DescriptorDocument.from_root(tree.getroot())

    def build_record(self, document: DescriptorDocument, descriptor_path: Path) -> ProjectRecord:
        """Run every extraction step against a parsed document."""
        project_dir = descriptor_path.parent
        record = ProjectRecord(name=descriptor_path.stem, path=str(descriptor_path))

        record.output_type = self._run_step(
            "output type", descriptor_path, lambda: self.extract_output_type(document)
        ) or DEFAULT_OUTPUT_TYPE
        record.package_references = self._run_step(
            "package references",
            descriptor_path,
            lambda: self.extract_package_references(document),
        ) or []
        record.project_references = self._run_step(
            "project references",
            descriptor_path,
            lambda: self.extract_project_references(document, project_dir),
        ) or []
        record.dependencies = self._run_step(
            "assembly references",
            descriptor_path,
            lambda: self.extract_assembly_references(document),
        ) or []
        # Implicit discovery extends the list in place
        self._run_step(
            "compiled dependencies",
            descriptor_path,
            lambda: self.scan_compiled_dependencies(project_dir, record.dependencies),
        )

        self.logger.debug(
            f"Parsed {record.name}: {len(record.package_references)} packages, "
            f"{len(record.project_references)} project refs, "
            f"{len(record.dependencies)} assemblies"
        )
        return record

    def _run_step(self, step_name: str, descriptor_path: Path, step: Callable):
        try:
            return step()
        except (OSError, ValueError, TypeError, AttributeError) as e:
            self.logger.error(f"Error extracting {step_name} from {descriptor_path.name}: {e}")
            return None

    def extract_output_type(self, document: DescriptorDocument) -> str:
        for group in document.property_groups:
            if group.output_type:
                return group.output_type
        return DEFAULT_OUTPUT_TYPE

    def extract_package_references(self, document: DescriptorDocument) -> list[PackageReference]:
        packages = []
        for group in document.item_groups:
            for element in group.package_references:
                if element.include:
                    packages.append(
                        PackageReference(
                            name=element.include, version=element.version or UNKNOWN_VERSION
                        )
                    )
        return packages

    def extract_project_references(
        self, document: DescriptorDocument, project_dir: Path
    ) -> list[str]:
        references = []
        for group in document.item_groups:
            for element in group.project_references:
                if element.include:
                    relative_path = element.include.replace("\\", os.sep)
                    references.append(os.path.normpath(os.path.join(project_dir, relative_path)))
        return references

    def extract_assembly_references(self, document: DescriptorDocument) -> list[str]:
        return [
            element.include
            for group in document.item_groups
            for element in group.references
            if element.include
        ]

    def scan_compiled_dependencies(self, project_dir: Path, dependencies: list[str]) -> list[str]:
        """Append binaries found under the build output directories.

        Only names not already present are added, each once.
        """
        for dir_name in self.config.build_output_directories:
            output_dir = project_dir / dir_name
            if output_dir.is_dir():
                self._scan_directory_for_binaries(output_dir, dependencies)
        return dependencies

    def _scan_directory_for_binaries(self, directory: Path, dependencies: list[str]) -> None:
        try:
            entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
        except OSError as e:
            # Build output directories may be locked or partially written
            self.logger.debug(f"Skipping unreadable build directory {directory}: {e}")
            return

        for entry in entries:
            if entry.is_dir():
                self._scan_directory_for_binaries(Path(entry.path), dependencies)
            elif entry.is_file() and entry.name.lower().endswith(self.config.binary_extension):
                assembly_name = entry.name[: -len(self.config.binary_extension)]
                if assembly_name not in dependencies:
                    dependencies.append(assembly_name)
