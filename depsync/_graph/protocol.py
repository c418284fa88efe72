"""Storage protocols for the dependency graph and SBOM snapshots."""

from typing import Optional, Protocol

from .._acquisition.result import SbomSnapshot
from .models import DependencyNode, Depth, NodeSelector


class GraphStore(Protocol):
    """
    Protocol for dependency graph persistence.

    Upserts merge by key and the last writer wins. upsert_node never
    overwrites an attribute with None, while update_node writes every
    attribute it is given (None clears the stored value).

    Example:
        store = InMemoryGraphStore()
        store.upsert_node("pkg:npm/lodash@4.17.21", {"name": "lodash", "version": "4.17.21"})
        store.upsert_edge("product-1", "pkg:npm/lodash@4.17.21")
        store.set_edge_depth("product-1", "pkg:npm/lodash@4.17.21", Depth.DIRECT)
    """

    def upsert_node(self, purl: str, attrs: dict) -> None:
        """Create the node if missing, then merge the non-None attributes."""
        ...

    def upsert_edge(self, product_id: str, purl: str, attrs: Optional[dict] = None) -> None:
        """Create the DEPENDS_ON edge from the product to the node if missing."""
        ...

    def set_edge_depth(self, product_id: str, purl: str, depth: Optional[Depth]) -> None:
        ...

    def get_edge_depths(self, product_id: str) -> dict[str, Optional[Depth]]:
        """Return purl -> depth for every edge of the product."""
        ...

    def get_product_purls(self, product_id: str) -> list[str]:
        ...

    def get_node(self, purl: str) -> Optional[DependencyNode]:
        ...

    def select_nodes_needing_enrichment(self, product_id: str, selector: NodeSelector) -> list[DependencyNode]:
        """Return the product's nodes the selector matches."""
        ...

    def update_node(self, purl: str, attrs: dict) -> None:
        ...

    def rename_node(self, purl: str, new_purl: str, attrs: Optional[dict] = None) -> None:
        """
        Move a node to a new purl, carrying its attributes and edges.

        When a node already exists at new_purl the two are merged: edges
        are repointed to it and attrs are written on it.
        """
        ...


class SnapshotStore(Protocol):
    """Protocol for storing the latest SBOM snapshot per product."""

    def save(self, snapshot: SbomSnapshot) -> None:
        """Replace the product's snapshot wholesale."""
        ...

    def get(self, product_id: str) -> Optional[SbomSnapshot]:
        ...

    def mark_stale(self, product_id: str) -> bool:
        """Flag the snapshot as stale. Returns False when there is none."""
        ...
