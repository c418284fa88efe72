"""SPDX 2.3 JSON helpers: document synthesis and package extraction."""

import time
from datetime import datetime, timezone
from typing import Iterable, Optional

from ._lockfiles.models import ParsedDependency

SPDX_VERSION = "SPDX-2.3"
DOCUMENT_ID = "SPDXRef-DOCUMENT"
NOASSERTION = "NOASSERTION"


def build_spdx_document(
    owner: str,
    repo: str,
    dependencies: Iterable[ParsedDependency],
    repo_url: Optional[str] = None,
    tool: str = "depsync",
    source: Optional[str] = None,
    relationships: bool = True,
) -> dict:
    """
    Build an SPDX 2.3 JSON document from parsed dependencies.

    The document has the same shape as the GitHub dependency-graph export,
    so every acquisition tier hands the graph writer one format. The root
    package takes SPDXRef-DOCUMENT and a com.github.<owner>.<repo> name,
    which the graph writer recognises and filters out.

    Args:
        owner: Repository owner
        repo: Repository name
        dependencies: Dependencies to list as packages
        repo_url: Download location of the root package
        tool: Tool name recorded in creationInfo
        source: Input file or method, recorded in creationInfo
        relationships: When True, emit DESCRIBES plus a DEPENDS_ON edge from
            the root to every dependency marked is_direct. When False the
            document carries no relationship data at all.

    Returns:
        SPDX JSON document as a dict
    """
    creator = f"Tool: {tool}"
    if source:
        creator = f"{creator} (from {source})"

    packages = [
        {
            "SPDXID": DOCUMENT_ID,
            "name": f"com.github.{owner}.{repo}",
            "versionInfo": "",
            "downloadLocation": repo_url or NOASSERTION,
            "licenseDeclared": NOASSERTION,
            "licenseConcluded": NOASSERTION,
            "supplier": f"Organization: {owner}",
            "externalRefs": [],
        }
    ]
    edges = []
    if relationships:
        edges.append(
            {
                "spdxElementId": DOCUMENT_ID,
                "relatedSpdxElement": DOCUMENT_ID,
                "relationshipType": "DESCRIBES",
            }
        )

    for index, dep in enumerate(dependencies):
        spdx_id = f"SPDXRef-Package-{index}"
        packages.append(
            {
                "SPDXID": spdx_id,
                "name": dep.name,
                "versionInfo": dep.version,
                "downloadLocation": NOASSERTION,
                "licenseDeclared": NOASSERTION,
                "licenseConcluded": NOASSERTION,
                "supplier": NOASSERTION,
                "externalRefs": [
                    {
                        "referenceCategory": "PACKAGE-MANAGER",
                        "referenceType": "purl",
                        "referenceLocator": dep.purl,
                    }
                ],
            }
        )
        if relationships and dep.is_direct:
            edges.append(
                {
                    "spdxElementId": DOCUMENT_ID,
                    "relatedSpdxElement": spdx_id,
                    "relationshipType": "DEPENDS_ON",
                }
            )

    return {
        "spdxVersion": SPDX_VERSION,
        "dataLicense": "CC0-1.0",
        "SPDXID": DOCUMENT_ID,
        "name": f"{owner}/{repo}",
        "documentNamespace": f"https://spdx.org/spdxdocs/{owner}-{repo}-{int(time.time() * 1000)}",
        "creationInfo": {
            "creators": [creator],
            "created": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        },
        "packages": packages,
        "relationships": edges,
    }


def unwrap_document(document: dict) -> dict:
    """Return the SPDX document itself, unwrapping GitHub's {"sbom": {...}} envelope."""
    inner = document.get("sbom") if isinstance(document, dict) else None
    return inner if isinstance(inner, dict) else document


def describes_targets(document: dict) -> set[str]:
    """SPDX ids the document DESCRIBES (its root elements)."""
    document = unwrap_document(document)
    return {
        rel.get("relatedSpdxElement")
        for rel in document.get("relationships") or []
        if rel.get("relationshipType") == "DESCRIBES" and rel.get("spdxElementId") == DOCUMENT_ID
    } - {None}


def is_root_package(package: dict, root_ids: Optional[set[str]] = None) -> bool:
    """Whether an SPDX package describes the repository itself rather than a dependency."""
    spdx_id = package.get("SPDXID")
    if spdx_id == DOCUMENT_ID or (package.get("name") or "").startswith("com.github."):
        return True
    return bool(root_ids) and spdx_id in root_ids


def iter_dependency_packages(document: dict):
    """Yield the dependency packages of an SPDX document, skipping root packages."""
    document = unwrap_document(document)
    root_ids = describes_targets(document)
    for package in document.get("packages") or []:
        if isinstance(package, dict) and not is_root_package(package, root_ids):
            yield package


def package_purl(package: dict) -> Optional[str]:
    """Return the purl external reference of an SPDX package, if any."""
    for ref in package.get("externalRefs") or []:
        if ref.get("referenceType") == "purl" and ref.get("referenceLocator"):
            return ref["referenceLocator"]
    return None
