"""Writes SPDX packages into the dependency graph and classifies their depth."""

from dataclasses import dataclass, field
from typing import Optional

from packageurl import PackageURL

from ..logging_config import logger
from ..spdx import (
    DOCUMENT_ID,
    NOASSERTION,
    describes_targets,
    iter_dependency_packages,
    package_purl,
    unwrap_document,
)
from .models import Depth
from .protocol import GraphStore


@dataclass
class PackageInfo:
    """Node attributes extracted from one SPDX package."""

    purl: str
    name: str
    version: str
    ecosystem: str
    license: str = NOASSERTION
    supplier: str = ""

    def node_attrs(self) -> dict:
        """Attributes for upsert. Placeholders become None so they never overwrite known values."""
        return {
            "name": self.name,
            "version": self.version,
            "ecosystem": self.ecosystem,
            "license": None if self.license == NOASSERTION else self.license,
            "supplier": None if self.supplier in ("", NOASSERTION) else self.supplier,
        }


@dataclass
class GraphWriteResult:
    package_count: int
    purls: list[str] = field(default_factory=list)
    direct_count: int = 0
    transitive_count: int = 0
    depth_classified: bool = False


def _purl_type(purl: str) -> Optional[str]:
    try:
        return PackageURL.from_string(purl).type
    except ValueError:
        return None


def extract_package_info(package: dict) -> PackageInfo:
    """
    Extract node attributes from an SPDX package.

    The purl comes from the package's purl external reference. Without one,
    a purl is synthesised from the ecosystem, name and version. SPDX names
    sometimes carry an ecosystem prefix (``npm:lodash``); only the part
    after the last colon is kept.
    """
    purl = package_purl(package) or ""
    ecosystem = (_purl_type(purl) if purl else None) or "unknown"

    name = package.get("name") or ""
    if ":" in name:
        name = name.split(":")[-1]
    version = package.get("versionInfo") or ""

    if not purl:
        purl = PackageURL(type=ecosystem, name=name or "unknown", version=version or None).to_string()

    return PackageInfo(
        purl=purl,
        name=name,
        version=version,
        ecosystem=ecosystem,
        license=package.get("licenseDeclared") or package.get("licenseConcluded") or NOASSERTION,
        supplier=package.get("supplier") or "",
    )


def direct_purls(document: dict, spdx_to_purl: dict[str, str]) -> Optional[set[str]]:
    """
    Compute the purls the product depends on directly.

    Returns None when the document carries no DESCRIBES relationship from
    SPDXRef-DOCUMENT, or no DEPENDS_ON edge leaves a root element: without
    those the direct set is unknown and depth must not be guessed.
    """
    document = unwrap_document(document)
    if not document.get("relationships"):
        return None
    roots = describes_targets(document)
    if not roots:
        return None
    roots.add(DOCUMENT_ID)

    direct = set()
    for rel in document["relationships"]:
        if rel.get("relationshipType") != "DEPENDS_ON" or rel.get("spdxElementId") not in roots:
            continue
        purl = spdx_to_purl.get(rel.get("relatedSpdxElement"))
        if purl:
            direct.add(purl)
    return direct or None


class DependencyGraphWriter:
    """
    Writes an SPDX document's packages as nodes and DEPENDS_ON edges of a
    product, then classifies each edge as direct or transitive.

    Classification covers every purl linked to the product, including ones
    from earlier syncs, so a re-sync leaves no edge with a stale depth.
    """

    def __init__(self, store: GraphStore):
        self.store = store

    def write(self, product_id: str, document: dict) -> GraphWriteResult:
        spdx_to_purl: dict[str, str] = {}
        purls: list[str] = []
        seen: set[str] = set()

        for package in iter_dependency_packages(document):
            info = extract_package_info(package)
            if package.get("SPDXID"):
                spdx_to_purl[package["SPDXID"]] = info.purl
            if info.purl in seen:
                continue
            seen.add(info.purl)
            purls.append(info.purl)
            self.store.upsert_node(info.purl, info.node_attrs())
            self.store.upsert_edge(product_id, info.purl, {})

        logger.info(f"Wrote {len(purls)} dependency nodes for product {product_id}")
        result = GraphWriteResult(package_count=len(purls), purls=purls)

        direct = direct_purls(document, spdx_to_purl)
        if direct is None:
            logger.info(f"No relationship data for product {product_id}, depth left unclassified")
            return result

        for purl in self.store.get_product_purls(product_id):
            if purl in direct:
                self.store.set_edge_depth(product_id, purl, Depth.DIRECT)
                result.direct_count += 1
            else:
                self.store.set_edge_depth(product_id, purl, Depth.TRANSITIVE)
                result.transitive_count += 1
        result.depth_classified = True
        logger.info(
            f"Classified depth for product {product_id}: {result.direct_count} direct, "
            f"{result.transitive_count} transitive"
        )
        return result
