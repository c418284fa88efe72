"""Hash and license enrichment of dependency graph nodes."""

from .background import BackgroundEnricher, GapNotifier, LoggingGapNotifier
from .license_utils import normalize_license
from .models import EnrichmentGapReport, GapReason, HashAlgorithm, HashRecord
from .pipeline import (
    EnrichmentPipeline,
    EnrichmentTarget,
    hash_enrichment,
    hash_target,
    license_enrichment,
    license_target,
)
from .protocol import RegistryLookup
from .versions import LockfileVersionResolver, VersionResolution

__all__ = [
    "BackgroundEnricher",
    "GapNotifier",
    "LoggingGapNotifier",
    "EnrichmentPipeline",
    "EnrichmentTarget",
    "hash_enrichment",
    "hash_target",
    "license_enrichment",
    "license_target",
    "EnrichmentGapReport",
    "GapReason",
    "HashAlgorithm",
    "HashRecord",
    "RegistryLookup",
    "LockfileVersionResolver",
    "VersionResolution",
    "normalize_license",
]
