"""Result types for SBOM acquisition."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from ..spdx import iter_dependency_packages

SOURCE_API = "api"
SOURCE_LOCKFILE = "lockfile"
SOURCE_IMPORT_SCAN = "import-scan"


@dataclass
class RepositorySnapshot:
    """Read-only repository data fetched concurrently before tiering."""

    repo: dict[str, Any]
    contributors: list[dict[str, Any]] = field(default_factory=list)
    languages: dict[str, int] = field(default_factory=dict)
    sbom: Optional[dict[str, Any]] = None
    releases: list[dict[str, Any]] = field(default_factory=list)
    tags: list[dict[str, Any]] = field(default_factory=list)

    @property
    def default_branch(self) -> str:
        return self.repo.get("default_branch") or "main"

    @property
    def html_url(self) -> Optional[str]:
        return self.repo.get("html_url")


@dataclass
class AcquisitionResult:
    """
    Outcome of tiered acquisition.

    source is "api", "lockfile:<filename>" or "import-scan:<lang>+<lang>".
    When every tier came up empty the result has no document and
    has_data is False; this is a normal outcome, not an error.
    """

    document: Optional[dict[str, Any]]
    source: Optional[str]
    tier: Optional[int] = None
    confidence: Optional[str] = None
    repository: Optional[RepositorySnapshot] = None
    lockfile_type: Optional[str] = None
    languages_detected: list[str] = field(default_factory=list)
    total_imports: int = 0

    @property
    def has_data(self) -> bool:
        return self.document is not None

    @property
    def package_count(self) -> int:
        """Number of packages in the document, excluding the root package."""
        if not self.document:
            return 0
        return sum(1 for _ in iter_dependency_packages(self.document))

    @classmethod
    def no_data(cls, repository: Optional[RepositorySnapshot] = None) -> "AcquisitionResult":
        return cls(document=None, source=None, repository=repository)


@dataclass
class SbomSnapshot:
    """Stored summary of the latest successful acquisition for a product."""

    product_id: str
    source: str
    package_count: int
    document: dict[str, Any]
    spdx_version: str = "SPDX-2.3"
    is_stale: bool = False
    synced_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_result(cls, product_id: str, result: AcquisitionResult) -> "SbomSnapshot":
        document = result.document or {}
        return cls(
            product_id=product_id,
            source=result.source or "",
            package_count=result.package_count,
            document=document,
            spdx_version=document.get("spdxVersion", "SPDX-2.3"),
        )
