"""In-memory graph and snapshot stores."""

import threading
from dataclasses import replace
from typing import Optional

from .._acquisition.result import SbomSnapshot
from ..logging_config import logger
from .models import DependencyNode, Depth, NodeSelector


class InMemoryGraphStore:
    """
    Thread-safe in-memory GraphStore.

    Used by the CLI when no graph database is configured, and by tests.
    The lock guards dict mutation only; callers never hold it across
    network calls. Nodes handed out are copies, so callers cannot mutate
    the store behind its back.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._nodes: dict[str, DependencyNode] = {}
        self._edges: dict[str, dict[str, Optional[Depth]]] = {}

    def upsert_node(self, purl: str, attrs: dict) -> None:
        updates = {key: value for key, value in attrs.items() if value is not None and key != "purl"}
        unknown = set(updates) - DependencyNode.field_names()
        if unknown:
            raise ValueError(f"Unknown node attributes: {', '.join(sorted(unknown))}")
        with self._lock:
            node = self._nodes.get(purl) or DependencyNode(purl=purl)
            self._nodes[purl] = replace(node, **updates)

    def upsert_edge(self, product_id: str, purl: str, attrs: Optional[dict] = None) -> None:
        with self._lock:
            if purl not in self._nodes:
                self._nodes[purl] = DependencyNode(purl=purl)
            self._edges.setdefault(product_id, {}).setdefault(purl, None)

    def set_edge_depth(self, product_id: str, purl: str, depth: Optional[Depth]) -> None:
        with self._lock:
            edges = self._edges.get(product_id)
            if edges is None or purl not in edges:
                logger.debug(f"No edge {product_id} -> {purl}, depth not set")
                return
            edges[purl] = depth

    def get_edge_depths(self, product_id: str) -> dict[str, Optional[Depth]]:
        with self._lock:
            return dict(self._edges.get(product_id, {}))

    def get_product_purls(self, product_id: str) -> list[str]:
        with self._lock:
            return list(self._edges.get(product_id, {}))

    def get_node(self, purl: str) -> Optional[DependencyNode]:
        with self._lock:
            node = self._nodes.get(purl)
            return replace(node) if node else None

    def select_nodes_needing_enrichment(self, product_id: str, selector: NodeSelector) -> list[DependencyNode]:
        with self._lock:
            nodes = [self._nodes[purl] for purl in self._edges.get(product_id, {}) if purl in self._nodes]
            return [replace(node) for node in nodes if selector(node)]

    def update_node(self, purl: str, attrs: dict) -> None:
        unknown = set(attrs) - DependencyNode.field_names()
        if unknown:
            raise ValueError(f"Unknown node attributes: {', '.join(sorted(unknown))}")
        with self._lock:
            node = self._nodes.get(purl)
            if node is None:
                raise KeyError(purl)
            self._nodes[purl] = replace(node, **attrs)

    def rename_node(self, purl: str, new_purl: str, attrs: Optional[dict] = None) -> None:
        attrs = attrs or {}
        unknown = set(attrs) - DependencyNode.field_names()
        if unknown:
            raise ValueError(f"Unknown node attributes: {', '.join(sorted(unknown))}")
        with self._lock:
            node = self._nodes.pop(purl, None)
            if node is None:
                raise KeyError(purl)
            target = self._nodes.get(new_purl) or replace(node, purl=new_purl)
            self._nodes[new_purl] = replace(target, **attrs)
            for edges in self._edges.values():
                if purl in edges:
                    depth = edges.pop(purl)
                    if edges.get(new_purl) is None:
                        edges[new_purl] = depth

    def __len__(self) -> int:
        return len(self._nodes)


class InMemorySnapshotStore:
    """Thread-safe in-memory SnapshotStore."""

    def __init__(self):
        self._lock = threading.Lock()
        self._snapshots: dict[str, SbomSnapshot] = {}

    def save(self, snapshot: SbomSnapshot) -> None:
        with self._lock:
            self._snapshots[snapshot.product_id] = snapshot

    def get(self, product_id: str) -> Optional[SbomSnapshot]:
        with self._lock:
            return self._snapshots.get(product_id)

    def mark_stale(self, product_id: str) -> bool:
        with self._lock:
            snapshot = self._snapshots.get(product_id)
            if snapshot is None:
                return False
            self._snapshots[product_id] = replace(snapshot, is_stale=True)
            return True
