"""Tiered SBOM acquisition: provider API, then lockfiles, then import scanning."""

from ..spdx import build_spdx_document
from .import_scanner import ImportScanner, ImportScanResult
from .languages import DEFAULT_PLUGINS, LanguagePlugin
from .orchestrator import SbomAcquirer, fetch_repository_snapshot
from .result import AcquisitionResult, RepositorySnapshot, SbomSnapshot
from .tiers import AcquisitionContext, ImportScanTier, LockfileTier, ProviderApiTier

__all__ = [
    "SbomAcquirer",
    "fetch_repository_snapshot",
    "AcquisitionResult",
    "RepositorySnapshot",
    "SbomSnapshot",
    "AcquisitionContext",
    "ProviderApiTier",
    "LockfileTier",
    "ImportScanTier",
    "ImportScanner",
    "ImportScanResult",
    "LanguagePlugin",
    "DEFAULT_PLUGINS",
    "build_spdx_document",
]
