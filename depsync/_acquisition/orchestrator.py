"""Tiered SBOM acquisition."""

from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from .._lockfiles.registry import ParserRegistry
from .._providers.protocol import RepoProvider
from ..config import Config
from ..exceptions import ProviderError
from ..logging_config import logger
from .import_scanner import ImportScanner
from .result import AcquisitionResult, RepositorySnapshot
from .tiers import AcquisitionContext, AcquisitionTier, ImportScanTier, LockfileTier, ProviderApiTier

SNAPSHOT_CALLS = ("repo", "contributors", "languages", "sbom", "releases", "tags")


def fetch_repository_snapshot(provider: RepoProvider, owner: str, repo: str) -> RepositorySnapshot:
    """
    Fetch repository metadata, contributors, languages, SBOM, releases and
    tags concurrently.

    The join is all-or-nothing: if any call fails the whole fetch fails.

    Raises:
        ProviderError: If any of the calls fails
    """
    calls = {
        "repo": provider.get_repo,
        "contributors": provider.get_contributors,
        "languages": provider.get_languages,
        "sbom": provider.get_sbom,
        "releases": provider.get_releases,
        "tags": provider.get_tags,
    }
    with ThreadPoolExecutor(max_workers=len(calls)) as executor:
        futures = {key: executor.submit(call, owner, repo) for key, call in calls.items()}
        results = {}
        for key in SNAPSHOT_CALLS:
            try:
                results[key] = futures[key].result()
            except ProviderError:
                raise
            except Exception as e:
                raise ProviderError(f"Failed to fetch {key} for {owner}/{repo}: {e}") from e

    return RepositorySnapshot(
        repo=results["repo"] or {},
        contributors=results["contributors"] or [],
        languages=results["languages"] or {},
        sbom=results["sbom"],
        releases=results["releases"] or [],
        tags=results["tags"] or [],
    )


class SbomAcquirer:
    """
    Runs the acquisition tiers in order and returns the first that yields
    packages.

    Tiers run sequentially so that a later tier's cost is only paid when
    the earlier ones came up empty.

    Example:
        acquirer = SbomAcquirer.from_config(registry, config)
        result = acquirer.acquire(provider, "psf", "requests")
        if result.has_data:
            print(result.source)
    """

    def __init__(self, tiers: Sequence[AcquisitionTier]):
        self.tiers = list(tiers)

    @classmethod
    def from_config(cls, registry: ParserRegistry, config: Optional[Config] = None) -> "SbomAcquirer":
        config = config or Config()
        return cls(
            [
                ProviderApiTier(),
                LockfileTier(registry, max_lockfile_bytes=config.max_lockfile_bytes),
                ImportScanTier(ImportScanner(max_source_files=config.max_source_files)),
            ]
        )

    def acquire(
        self,
        provider: RepoProvider,
        owner: str,
        repo: str,
        snapshot: Optional[RepositorySnapshot] = None,
    ) -> AcquisitionResult:
        """
        Acquire an SPDX document for a repository.

        Raises:
            ProviderError: If the repository snapshot cannot be fetched
        """
        if snapshot is None:
            snapshot = fetch_repository_snapshot(provider, owner, repo)
        context = AcquisitionContext(provider=provider, owner=owner, repo=repo, snapshot=snapshot)

        for tier in self.tiers:
            logger.info(f"Trying acquisition tier {tier.tier} ({tier.name}) for {owner}/{repo}")
            result = tier.attempt(context)
            if result is not None and result.has_data:
                logger.info(f"Acquired {result.package_count} packages for {owner}/{repo} from {result.source}")
                return result

        logger.info(f"No dependency data found for {owner}/{repo} in any tier")
        return AcquisitionResult.no_data(repository=snapshot)
