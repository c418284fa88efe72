"""Neo4j-backed graph and snapshot store."""

import json
from typing import Any, Optional

from neo4j import GraphDatabase
from neo4j.exceptions import DriverError, Neo4jError

from .._acquisition.result import SbomSnapshot
from ..exceptions import StoreError
from ..logging_config import logger
from .models import NOASSERTION, DependencyNode, Depth, NodeSelector

CONSTRAINTS = [
    "CREATE CONSTRAINT dependency_purl_unique IF NOT EXISTS FOR (d:Dependency) REQUIRE d.purl IS UNIQUE",
    "CREATE CONSTRAINT product_id_unique IF NOT EXISTS FOR (p:Product) REQUIRE p.id IS UNIQUE",
]


def _to_native(value: Any) -> Any:
    # neo4j.time types expose to_native(); plain values pass through
    return value.to_native() if hasattr(value, "to_native") else value


class Neo4jGraphStore:
    """
    GraphStore and SnapshotStore on Neo4j.

    Layout:
        (:Product {id})-[:DEPENDS_ON {depth}]->(:Dependency {purl, ...})
        (:Product {id})-[:HAS_SBOM]->(:SBOM {productId, source, ...})

    The SPDX document is stored on the SBOM node as a JSON string, since
    Neo4j properties cannot hold nested maps.
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        driver=None,
        database: Optional[str] = None,
    ):
        if driver is None:
            if not uri:
                raise StoreError("Neo4j URI is required when no driver is given")
            try:
                driver = GraphDatabase.driver(uri, auth=(user, password))
            except (DriverError, Neo4jError, ValueError) as e:
                raise StoreError(f"Failed to connect to Neo4j at {uri}: {e}") from e
            logger.info(f"Connected to Neo4j at {uri}")
        self.driver = driver
        self.database = database
        self._ensure_constraints()

    def _session(self):
        if self.database:
            return self.driver.session(database=self.database)
        return self.driver.session()

    def _run(self, query: str, **params) -> list:
        try:
            with self._session() as session:
                return list(session.run(query, **params))
        except (DriverError, Neo4jError) as e:
            raise StoreError(f"Neo4j query failed: {e}") from e

    def _ensure_constraints(self) -> None:
        for constraint in CONSTRAINTS:
            try:
                self._run(constraint)
            except StoreError as e:
                logger.warning(f"Failed to create constraint: {e}")

    def close(self) -> None:
        self.driver.close()

    # GraphStore

    def upsert_node(self, purl: str, attrs: dict) -> None:
        updates = {key: value for key, value in attrs.items() if value is not None and key != "purl"}
        self._run(
            """
            MERGE (d:Dependency {purl: $purl})
            ON CREATE SET d.license = $noassertion, d.supplier = ''
            SET d += $attrs
            """,
            purl=purl,
            attrs=updates,
            noassertion=NOASSERTION,
        )

    def upsert_edge(self, product_id: str, purl: str, attrs: Optional[dict] = None) -> None:
        self._run(
            """
            MERGE (p:Product {id: $product_id})
            MERGE (d:Dependency {purl: $purl})
            ON CREATE SET d.license = $noassertion, d.supplier = ''
            MERGE (p)-[r:DEPENDS_ON]->(d)
            SET r += $attrs
            """,
            product_id=product_id,
            purl=purl,
            attrs=attrs or {},
            noassertion=NOASSERTION,
        )

    def set_edge_depth(self, product_id: str, purl: str, depth: Optional[Depth]) -> None:
        self._run(
            """
            MATCH (:Product {id: $product_id})-[r:DEPENDS_ON]->(:Dependency {purl: $purl})
            SET r.depth = $depth
            """,
            product_id=product_id,
            purl=purl,
            depth=depth.value if depth else None,
        )

    def get_edge_depths(self, product_id: str) -> dict[str, Optional[Depth]]:
        records = self._run(
            """
            MATCH (:Product {id: $product_id})-[r:DEPENDS_ON]->(d:Dependency)
            RETURN d.purl AS purl, r.depth AS depth
            """,
            product_id=product_id,
        )
        return {record["purl"]: Depth(record["depth"]) if record["depth"] else None for record in records}

    def get_product_purls(self, product_id: str) -> list[str]:
        records = self._run(
            "MATCH (:Product {id: $product_id})-[:DEPENDS_ON]->(d:Dependency) RETURN d.purl AS purl",
            product_id=product_id,
        )
        return [record["purl"] for record in records]

    def get_node(self, purl: str) -> Optional[DependencyNode]:
        records = self._run("MATCH (d:Dependency {purl: $purl}) RETURN d", purl=purl)
        if not records:
            return None
        return self._node_from_record(records[0])

    def select_nodes_needing_enrichment(self, product_id: str, selector: NodeSelector) -> list[DependencyNode]:
        records = self._run(
            f"""
            MATCH (:Product {{id: $product_id}})-[:DEPENDS_ON]->(d:Dependency)
            WHERE {selector.cypher}
            RETURN d
            """,
            product_id=product_id,
        )
        return [self._node_from_record(record) for record in records]

    def update_node(self, purl: str, attrs: dict) -> None:
        # SET += with a null value removes the property, which clears gap reasons
        self._run("MATCH (d:Dependency {purl: $purl}) SET d += $attrs", purl=purl, attrs=attrs)

    def rename_node(self, purl: str, new_purl: str, attrs: Optional[dict] = None) -> None:
        if new_purl == purl:
            self.update_node(purl, attrs or {})
            return
        # the purl uniqueness constraint forbids SET d.purl when the target exists
        self._run(
            """
            MATCH (old:Dependency {purl: $purl})
            MERGE (new:Dependency {purl: $new_purl})
            ON CREATE SET new = properties(old), new.purl = $new_purl
            SET new += $attrs
            WITH old, new
            OPTIONAL MATCH (p:Product)-[r:DEPENDS_ON]->(old)
            FOREACH (_ IN CASE WHEN p IS NULL THEN [] ELSE [1] END |
                MERGE (p)-[moved:DEPENDS_ON]->(new)
                SET moved.depth = coalesce(moved.depth, r.depth)
            )
            WITH DISTINCT old
            DETACH DELETE old
            """,
            purl=purl,
            new_purl=new_purl,
            attrs=attrs or {},
        )

    @staticmethod
    def _node_from_record(record) -> DependencyNode:
        properties = {key: _to_native(value) for key, value in dict(record["d"]).items()}
        return DependencyNode.from_properties(properties)

    # SnapshotStore

    def save(self, snapshot: SbomSnapshot) -> None:
        self._run(
            """
            MERGE (p:Product {id: $product_id})
            MERGE (p)-[:HAS_SBOM]->(s:SBOM {productId: $product_id})
            SET s.source = $source,
                s.spdxVersion = $spdx_version,
                s.packageCount = $package_count,
                s.isStale = $is_stale,
                s.syncedAt = $synced_at,
                s.document = $document
            """,
            product_id=snapshot.product_id,
            source=snapshot.source,
            spdx_version=snapshot.spdx_version,
            package_count=snapshot.package_count,
            is_stale=snapshot.is_stale,
            synced_at=snapshot.synced_at,
            document=json.dumps(snapshot.document),
        )

    def get(self, product_id: str) -> Optional[SbomSnapshot]:
        records = self._run("MATCH (s:SBOM {productId: $product_id}) RETURN s", product_id=product_id)
        if not records:
            return None
        properties = dict(records[0]["s"])
        return SbomSnapshot(
            product_id=product_id,
            source=properties.get("source", ""),
            package_count=properties.get("packageCount", 0),
            document=json.loads(properties.get("document") or "{}"),
            spdx_version=properties.get("spdxVersion", "SPDX-2.3"),
            is_stale=bool(properties.get("isStale", False)),
            synced_at=_to_native(properties.get("syncedAt")),
        )

    def mark_stale(self, product_id: str) -> bool:
        records = self._run(
            "MATCH (s:SBOM {productId: $product_id}) SET s.isStale = true RETURN count(s) AS updated",
            product_id=product_id,
        )
        return bool(records) and records[0]["updated"] > 0
