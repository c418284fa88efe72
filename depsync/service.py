"""Product dependency sync: acquire, write the graph, snapshot, enrich."""

from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlparse

from ._acquisition import AcquisitionResult, SbomAcquirer, SbomSnapshot
from ._enrichment import BackgroundEnricher, LockfileVersionResolver, VersionResolution
from ._graph import DependencyGraphWriter, GraphStore, GraphWriteResult, SnapshotStore
from ._lockfiles import create_default_registry
from ._lockfiles.registry import ParserRegistry
from ._providers import RepoProvider, create_provider, detect_provider, parse_repo_url
from ._providers.urls import RepoRef
from .config import Config
from .exceptions import UnsupportedRepositoryError
from .logging_config import logger

STATUS_SYNCED = "synced"
STATUS_NO_DATA = "no_data"

ProviderFactory = Callable[[str, Optional[str]], RepoProvider]


@dataclass
class SyncResult:
    """Outcome of one product sync."""

    product_id: str
    status: str
    repository: str
    source: Optional[str] = None
    tier: Optional[int] = None
    confidence: Optional[str] = None
    package_count: int = 0
    graph: Optional[GraphWriteResult] = None
    acquisition: Optional[AcquisitionResult] = None
    versions: Optional[VersionResolution] = None
    enrichment: Optional[Future] = None

    @property
    def synced(self) -> bool:
        return self.status == STATUS_SYNCED


def default_provider_factory(config: Config) -> ProviderFactory:
    def factory(kind: str, token: Optional[str]) -> RepoProvider:
        return create_provider(
            kind,
            token=token or config.token_for(kind),
            instance_url=config.gitea_instance_url,
            timeout=config.request_timeout,
            max_repo_files=config.max_repo_files,
        )

    return factory


class DependencySyncService:
    """
    Syncs a product's dependencies from its source repository.

    Example:
        service = DependencySyncService(
            graph_store=InMemoryGraphStore(),
            snapshot_store=InMemorySnapshotStore(),
        )
        result = service.sync_product("product-1", "https://github.com/psf/requests")
    """

    def __init__(
        self,
        provider_factory: Optional[ProviderFactory] = None,
        graph_store: Optional[GraphStore] = None,
        snapshot_store: Optional[SnapshotStore] = None,
        enricher: Optional[BackgroundEnricher] = None,
        registry: Optional[ParserRegistry] = None,
        config: Optional[Config] = None,
    ):
        if graph_store is None or snapshot_store is None:
            raise ValueError("graph_store and snapshot_store are required")
        self.config = config or Config()
        self.provider_factory = provider_factory or default_provider_factory(self.config)
        self.graph_store = graph_store
        self.snapshot_store = snapshot_store
        self.enricher = enricher
        self.registry = registry or create_default_registry()
        self.acquirer = SbomAcquirer.from_config(self.registry, self.config)
        self.writer = DependencyGraphWriter(graph_store)
        self.version_resolver = LockfileVersionResolver(graph_store)

    def resolve_repository(self, repo_url: str) -> RepoRef:
        """
        Work out the provider, owner and repository of a URL.

        URLs on the configured self-hosted Gitea instance resolve to "gitea".

        Raises:
            UnsupportedRepositoryError: If the URL is not a recognised repository URL
        """
        kind = detect_provider(repo_url)
        if kind is None and self.config.gitea_instance_url:
            instance_host = urlparse(self.config.gitea_instance_url).hostname
            url = repo_url if "://" in repo_url else f"https://{repo_url}"
            if instance_host and urlparse(url).hostname == instance_host:
                kind = "gitea"
        ref = parse_repo_url(repo_url, provider=kind) if kind else None
        if ref is None:
            raise UnsupportedRepositoryError(f"Unsupported repository URL: {repo_url}")
        return ref

    def sync_product(
        self,
        product_id: str,
        repo_url: str,
        token: Optional[str] = None,
        enrich: bool = True,
    ) -> SyncResult:
        """
        Acquire an SBOM for the product's repository and record it.

        No data in any acquisition tier is a normal outcome and returns a
        result with status "no_data"; the stores are left untouched.

        Raises:
            UnsupportedRepositoryError: If the URL is not recognised
            ProviderError: If the repository snapshot cannot be fetched
            StoreError: If the graph or snapshot cannot be written
        """
        ref = self.resolve_repository(repo_url)
        logger.info(f"Syncing product {product_id} from {ref.provider}:{ref.full_name}")
        provider = self.provider_factory(ref.provider, token)

        acquisition = self.acquirer.acquire(provider, ref.owner, ref.repo)
        if not acquisition.has_data:
            logger.info(f"No dependency data for product {product_id}")
            return SyncResult(
                product_id=product_id,
                status=STATUS_NO_DATA,
                repository=ref.full_name,
                acquisition=acquisition,
            )

        graph = self.writer.write(product_id, acquisition.document)
        self.snapshot_store.save(SbomSnapshot.from_result(product_id, acquisition))

        # versionless nodes cannot be hash-enriched, so resolve them first
        branch = acquisition.repository.default_branch if acquisition.repository else "main"
        versions = self.version_resolver.resolve(product_id, provider, ref.owner, ref.repo, branch)

        enrichment = None
        if enrich and self.enricher is not None:
            enrichment = self.enricher.submit(product_id)

        return SyncResult(
            product_id=product_id,
            status=STATUS_SYNCED,
            repository=ref.full_name,
            source=acquisition.source,
            tier=acquisition.tier,
            confidence=acquisition.confidence,
            package_count=graph.package_count,
            graph=graph,
            acquisition=acquisition,
            versions=versions,
            enrichment=enrichment,
        )

    def mark_stale(self, product_id: str) -> bool:
        """Flag the product's snapshot as stale, e.g. after a push notification."""
        stale = self.snapshot_store.mark_stale(product_id)
        if stale:
            logger.info(f"Marked SBOM snapshot of product {product_id} as stale")
        else:
            logger.debug(f"No SBOM snapshot to mark stale for product {product_id}")
        return stale
