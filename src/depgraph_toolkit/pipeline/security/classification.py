"""
Rule-based package security classification.

Every (project, package) pair is placed in exactly one bucket. Rules are
evaluated in order and the first match wins:

1. vulnerable - ``name:version`` contains a known-vulnerable entry
2. deprecated - the package name contains a deprecated name fragment
3. outdated   - pre-release version, or major version below 3
4. secure     - everything else

The lists are small built-in samples, not a vulnerability feed.
"""

import logging
import re
from collections.abc import Iterable

from ...shared.models import (
    PackageClassification,
    PackageReference,
    ProjectRecord,
    SecurityReport,
    SecurityStatus,
)

KNOWN_VULNERABLE_PACKAGES: tuple[str, ...] = (
    "Newtonsoft.Json:12.0.0",
    "System.Text.Json:4.6.0",
    "Microsoft.AspNetCore.Mvc:2.1.0",
)

DEPRECATED_PACKAGE_FRAGMENTS: tuple[str, ...] = (
    "Microsoft.AspNet.Mvc",
    "System.Web.Mvc",
    "Microsoft.Owin",
)

PRERELEASE_MARKERS: tuple[str, ...] = ("beta", "alpha", "rc")

MINIMUM_CURRENT_MAJOR = 3

ISSUE_MESSAGES = {
    SecurityStatus.VULNERABLE: "Known security vulnerability",
    SecurityStatus.DEPRECATED: "Package is deprecated",
    SecurityStatus.OUTDATED: "Outdated version available",
}

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def parse_major_version(version: str) -> int | None:
    """Integer value of the leading digits of the first dotted segment.

    ``"12.0.1"`` -> 12, ``"2-preview"`` -> 2, ``"x.0.0"`` -> None.
    """
    match = _LEADING_INTEGER.match(version.split(".", 1)[0])
    return int(match.group(1)) if match else None


def is_old_version(version: str) -> bool:
    """True for pre-release versions and for majors below 3.

    A version whose first segment is not numeric is never considered old.
    """
    if any(marker in version for marker in PRERELEASE_MARKERS):
        return True

    major = parse_major_version(version)
    return major is not None and major < MINIMUM_CURRENT_MAJOR


class SecurityClassifier:
    """Buckets package references by risk."""

    def __init__(
        self,
        known_vulnerable: Iterable[str] = KNOWN_VULNERABLE_PACKAGES,
        deprecated_fragments: Iterable[str] = DEPRECATED_PACKAGE_FRAGMENTS,
    ):
        self.known_vulnerable = tuple(known_vulnerable)
        self.deprecated_fragments = tuple(deprecated_fragments)
        self.logger = logging.getLogger(__name__)

    def status_of(self, package: PackageReference) -> SecurityStatus:
        package_id = f"{package.name}:{package.version}"
        if any(entry in package_id for entry in self.known_vulnerable):
            return SecurityStatus.VULNERABLE
        if any(fragment in package.name for fragment in self.deprecated_fragments):
            return SecurityStatus.DEPRECATED
        if is_old_version(package.version):
            return SecurityStatus.OUTDATED
        return SecurityStatus.SECURE

    def classify_package(
        self, project_name: str, package: PackageReference
    ) -> tuple[SecurityStatus, PackageClassification]:
        status = self.status_of(package)
        issue = ISSUE_MESSAGES.get(status)
        classification = PackageClassification(
            project_name=project_name,
            package_name=package.name,
            version=package.version,
            issues=[issue] if issue else [],
        )
        return status, classification

    def classify(self, projects: Iterable[ProjectRecord]) -> SecurityReport:
        """Classify every (project, package) pair.

        Args:
            projects: Parsed project records

        Returns:
            Report whose four buckets partition all pairs
        """
        report = SecurityReport()
        for project in projects:
            for package in project.package_references:
                status, classification = self.classify_package(project.name, package)
                report.bucket(status).append(classification)

        summary = ", ".join(f"{name}={count}" for name, count in report.counts().items())
        self.logger.info(f"Classified {report.total} package references: {summary}")
        return report
