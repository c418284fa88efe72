"""Graph data models: dependency nodes, edge depth and enrichment selectors."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

NOASSERTION = "NOASSERTION"
UNKNOWN_LICENSES = frozenset({NOASSERTION, "NONE", ""})


class Depth(Enum):
    """Position of a dependency relative to the product that depends on it."""

    DIRECT = "direct"
    TRANSITIVE = "transitive"


@dataclass
class DependencyNode:
    """
    A package in the dependency graph, keyed by purl.

    Nodes are shared across products: two products depending on the same
    purl point at the same node, so enrichment done for one benefits both.
    """

    purl: str
    name: str = ""
    version: str = ""
    version_source: Optional[str] = None
    ecosystem: str = "unknown"
    license: str = NOASSERTION
    supplier: str = ""
    hash: Optional[str] = None
    hash_algorithm: Optional[str] = None
    download_url: Optional[str] = None
    license_source: Optional[str] = None
    hash_gap_reason: Optional[str] = None
    license_gap_reason: Optional[str] = None
    hash_enriched_at: Optional[datetime] = None
    license_enriched_at: Optional[datetime] = None

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}

    @classmethod
    def from_properties(cls, properties: dict) -> "DependencyNode":
        """Build a node from stored properties, ignoring unknown keys."""
        known = cls.field_names()
        return cls(**{key: value for key, value in properties.items() if key in known})

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in self.field_names()}


@dataclass
class DependsOnEdge:
    """A product's dependency on a node. depth is None until classified."""

    product_id: str
    purl: str
    depth: Optional[Depth] = None
    attrs: dict = field(default_factory=dict)


@dataclass(frozen=True)
class NodeSelector:
    """
    Selects nodes that still need an enrichment pass.

    matches is evaluated by in-memory stores; cypher is the equivalent
    WHERE clause over a node bound to ``d`` for graph databases.
    """

    name: str
    matches: Callable[[DependencyNode], bool]
    cypher: str

    def __call__(self, node: DependencyNode) -> bool:
        return self.matches(node)


MISSING_HASH = NodeSelector(
    name="missing-hash",
    matches=lambda node: node.hash is None,
    cypher="d.hash IS NULL",
)

MISSING_LICENSE = NodeSelector(
    name="missing-license",
    matches=lambda node: node.license is None or node.license in UNKNOWN_LICENSES,
    cypher="(d.license IS NULL OR d.license IN ['NOASSERTION', 'NONE', ''])",
)

MISSING_VERSION = NodeSelector(
    name="missing-version",
    matches=lambda node: not node.version,
    cypher="(d.version IS NULL OR d.version = '')",
)
