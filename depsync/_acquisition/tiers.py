"""Acquisition tiers, attempted in order until one yields packages."""

from dataclasses import dataclass
from typing import Optional, Protocol

from .._lockfiles.registry import ParserRegistry
from .._providers.protocol import RepoProvider
from ..config import DEFAULT_MAX_LOCKFILE_BYTES
from ..logging_config import logger
from ..spdx import build_spdx_document, iter_dependency_packages
from .import_scanner import ImportScanner
from .result import SOURCE_API, SOURCE_IMPORT_SCAN, SOURCE_LOCKFILE, AcquisitionResult, RepositorySnapshot


@dataclass
class AcquisitionContext:
    provider: RepoProvider
    owner: str
    repo: str
    snapshot: RepositorySnapshot

    @property
    def branch(self) -> str:
        return self.snapshot.default_branch


class AcquisitionTier(Protocol):
    """A strategy for obtaining an SPDX document for a repository."""

    @property
    def name(self) -> str:
        ...

    @property
    def tier(self) -> int:
        ...

    def attempt(self, context: AcquisitionContext) -> Optional[AcquisitionResult]:
        """Return a result with packages, or None to fall through to the next tier."""
        ...


def _has_packages(document: dict) -> bool:
    return any(True for _ in iter_dependency_packages(document))


class ProviderApiTier:
    """Tier 1: the hosting provider's own dependency-graph SBOM."""

    name = "provider-api"
    tier = 1

    def attempt(self, context: AcquisitionContext) -> Optional[AcquisitionResult]:
        if not context.provider.supports_api_sbom:
            logger.debug(f"{context.provider.name} has no SBOM API, skipping tier 1")
            return None

        document = context.snapshot.sbom
        if not document or not _has_packages(document):
            logger.info(f"No API SBOM packages for {context.owner}/{context.repo}")
            return None

        return AcquisitionResult(
            document=document,
            source=SOURCE_API,
            tier=self.tier,
            confidence="high",
            repository=context.snapshot,
        )


class LockfileTier:
    """Tier 2: the first dependency file in the repository root that parses to something."""

    name = "lockfile"
    tier = 2

    def __init__(self, registry: ParserRegistry, max_lockfile_bytes: int = DEFAULT_MAX_LOCKFILE_BYTES):
        self.registry = registry
        self.max_lockfile_bytes = max_lockfile_bytes

    def attempt(self, context: AcquisitionContext) -> Optional[AcquisitionResult]:
        for filename in self.registry.supported_files:
            try:
                content = context.provider.get_file_content(context.owner, context.repo, context.branch, filename)
            except Exception as e:
                logger.warning(f"Error fetching {filename} from {context.owner}/{context.repo}: {e}")
                continue
            if not content:
                continue

            if len(content) > self.max_lockfile_bytes:
                logger.warning(
                    f"{filename} is {len(content) / 1024 / 1024:.1f} MB, skipping "
                    f"(limit {self.max_lockfile_bytes / 1024 / 1024:.0f} MB)"
                )
                continue

            result = self.registry.parse(filename, content)
            if result.is_empty:
                logger.info(f"{filename} found but contains no dependencies")
                continue

            logger.info(f"Found {filename}: {len(result)} dependencies")
            document = build_spdx_document(
                context.owner,
                context.repo,
                result.dependencies,
                repo_url=context.snapshot.html_url,
                tool="depsync-lockfile",
                source=filename,
                # no direct markers means no relationship data worth asserting
                relationships=any(dep.is_direct for dep in result.dependencies),
            )
            return AcquisitionResult(
                document=document,
                source=f"{SOURCE_LOCKFILE}:{filename}",
                tier=self.tier,
                confidence="high",
                repository=context.snapshot,
                lockfile_type=filename,
            )

        logger.info(f"No usable lockfile found for {context.owner}/{context.repo}")
        return None


class ImportScanTier:
    """Tier 3: infer packages from import statements in source files."""

    name = "import-scan"
    tier = 3

    def __init__(self, scanner: ImportScanner):
        self.scanner = scanner

    def attempt(self, context: AcquisitionContext) -> Optional[AcquisitionResult]:
        try:
            scan = self.scanner.scan(context.provider, context.owner, context.repo, context.branch)
        except Exception as e:
            logger.warning(f"Import scan failed for {context.owner}/{context.repo}: {e}")
            return None
        if scan is None:
            return None

        document = build_spdx_document(
            context.owner,
            context.repo,
            scan.dependencies,
            repo_url=context.snapshot.html_url,
            tool="depsync-import-scanner",
            source="import statements",
        )
        return AcquisitionResult(
            document=document,
            source=f"{SOURCE_IMPORT_SCAN}:{'+'.join(scan.languages_detected)}",
            tier=self.tier,
            confidence=scan.confidence,
            repository=context.snapshot,
            languages_detected=scan.languages_detected,
            total_imports=scan.total_imports,
        )
