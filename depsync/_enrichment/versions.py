"""Fill in missing npm versions from the repository's package-lock.json.

SBOMs from the hosting provider's API sometimes list npm packages without
a version. Those nodes cannot be hash-enriched, so before enrichment the
exact pinned version is looked up in the lockfile and written back,
moving the node to a versioned purl.
"""

from dataclasses import dataclass
from typing import Optional

from packageurl import PackageURL

from .._graph.models import MISSING_VERSION, DependencyNode
from .._graph.protocol import GraphStore
from .._lockfiles.parsers import PackageLockParser
from .._providers import RepoProvider
from ..logging_config import logger

LOCKFILE_NAME = "package-lock.json"
VERSION_SOURCE_LOCKFILE = "lockfile"


@dataclass
class VersionResolution:
    """Counts from one lockfile version pass."""

    resolved: int = 0
    total_no_version: int = 0
    lockfile_found: bool = False


def _package_name(node: DependencyNode) -> str:
    try:
        purl = PackageURL.from_string(node.purl)
    except ValueError:
        return node.name
    return f"{purl.namespace}/{purl.name}" if purl.namespace else purl.name


def _versioned_purl(purl: str, version: str) -> str:
    try:
        parsed = PackageURL.from_string(purl)
    except ValueError:
        return f"{purl}@{version}"
    if parsed.version:
        return purl
    return parsed._replace(version=version).to_string()


class LockfileVersionResolver:
    """
    Resolves versionless npm nodes of a product against package-lock.json.

    Never raises: every failure is logged and the counts gathered so far
    are returned.

    Example:
        resolver = LockfileVersionResolver(store)
        result = resolver.resolve("product-1", provider, "acme", "web", "main")
    """

    def __init__(self, store: GraphStore, parser: Optional[PackageLockParser] = None):
        self.store = store
        self.parser = parser or PackageLockParser()

    def resolve(self, product_id: str, provider: RepoProvider, owner: str, repo: str, branch: str) -> VersionResolution:
        result = VersionResolution()
        try:
            nodes = list(self.store.select_nodes_needing_enrichment(product_id, MISSING_VERSION))
        except Exception as e:
            logger.warning(f"Failed to select versionless dependencies of {product_id}: {e}")
            return result

        result.total_no_version = len(nodes)
        if not nodes:
            logger.debug(f"No versionless dependencies for product {product_id}")
            return result

        logger.info(f"Found {len(nodes)} dependencies without versions, fetching {LOCKFILE_NAME}")
        try:
            content = provider.get_file_content(owner, repo, branch, LOCKFILE_NAME)
        except Exception as e:
            logger.warning(f"Failed to fetch {LOCKFILE_NAME} from {owner}/{repo}: {e}")
            return result
        if not content:
            logger.info(f"No {LOCKFILE_NAME} in {owner}/{repo}")
            return result
        result.lockfile_found = True

        try:
            versions = self.parser.resolved_versions(content)
        except Exception as e:
            logger.warning(f"Failed to parse {LOCKFILE_NAME} from {owner}/{repo}: {e}")
            return result

        for node in nodes:
            if node.ecosystem != "npm":
                continue
            version = versions.get(_package_name(node))
            if not version:
                continue
            attrs = {"version": version, "version_source": VERSION_SOURCE_LOCKFILE, "hash_gap_reason": None}
            try:
                self.store.rename_node(node.purl, _versioned_purl(node.purl, version), attrs)
            except Exception as e:
                logger.warning(f"Failed to store lockfile version for {node.purl}: {e}")
                continue
            result.resolved += 1

        logger.info(
            f"Resolved {result.resolved}/{result.total_no_version} version gaps of {product_id} from {LOCKFILE_NAME}"
        )
        return result
