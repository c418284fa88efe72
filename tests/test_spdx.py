"""Tests for SPDX document synthesis and package extraction."""

from depsync._lockfiles.models import Ecosystem, ParsedDependency, build_purl
from depsync.spdx import (
    build_spdx_document,
    describes_targets,
    is_root_package,
    iter_dependency_packages,
    package_purl,
    unwrap_document,
)


def dep(name, version, is_direct, ecosystem=Ecosystem.NPM):
    return ParsedDependency(
        name=name,
        version=version,
        ecosystem=ecosystem,
        purl=build_purl(ecosystem, name, version),
        is_direct=is_direct,
    )


class TestBuildSpdxDocument:
    """Tests for build_spdx_document."""

    def test_document_shape(self):
        """Test the document header and root package."""
        document = build_spdx_document(
            "acme", "web", [dep("lodash", "4.17.21", True)], repo_url="https://github.com/acme/web", source="x.lock"
        )
        assert document["spdxVersion"] == "SPDX-2.3"
        assert document["SPDXID"] == "SPDXRef-DOCUMENT"
        assert document["name"] == "acme/web"
        assert document["creationInfo"]["creators"] == ["Tool: depsync (from x.lock)"]
        root = document["packages"][0]
        assert root["name"] == "com.github.acme.web"
        assert root["downloadLocation"] == "https://github.com/acme/web"

    def test_packages_carry_purl_refs(self):
        """Test that every dependency becomes a package with a purl external ref."""
        document = build_spdx_document("acme", "web", [dep("lodash", "4.17.21", True), dep("ms", "2.1.3", False)])
        packages = list(iter_dependency_packages(document))
        assert [package_purl(p) for p in packages] == ["pkg:npm/lodash@4.17.21", "pkg:npm/ms@2.1.3"]
        assert packages[0]["versionInfo"] == "4.17.21"
        assert packages[0]["licenseDeclared"] == "NOASSERTION"

    def test_depends_on_only_for_direct(self):
        """Test that DEPENDS_ON edges are emitted for direct dependencies only."""
        document = build_spdx_document("acme", "web", [dep("lodash", "4.17.21", True), dep("ms", "2.1.3", False)])
        relationships = document["relationships"]
        assert relationships[0] == {
            "spdxElementId": "SPDXRef-DOCUMENT",
            "relatedSpdxElement": "SPDXRef-DOCUMENT",
            "relationshipType": "DESCRIBES",
        }
        assert [r["relatedSpdxElement"] for r in relationships[1:]] == ["SPDXRef-Package-0"]

    def test_no_relationships(self):
        """Test that relationships=False omits all relationship data."""
        document = build_spdx_document("acme", "web", [dep("lodash", "4.17.21", True)], relationships=False)
        assert document["relationships"] == []


class TestPackageHelpers:
    """Tests for the package helpers shared by acquisition and the graph writer."""

    def test_unwrap_envelope(self):
        """Test that the GitHub {"sbom": ...} envelope is removed."""
        inner = {"spdxVersion": "SPDX-2.3"}
        assert unwrap_document({"sbom": inner}) is inner
        assert unwrap_document(inner) is inner

    def test_describes_targets(self):
        """Test DESCRIBES target extraction from the document element only."""
        document = {
            "relationships": [
                {"spdxElementId": "SPDXRef-DOCUMENT", "relatedSpdxElement": "SPDXRef-root", "relationshipType": "DESCRIBES"},
                {"spdxElementId": "SPDXRef-root", "relatedSpdxElement": "SPDXRef-a", "relationshipType": "DEPENDS_ON"},
                {"spdxElementId": "SPDXRef-other", "relatedSpdxElement": "SPDXRef-b", "relationshipType": "DESCRIBES"},
            ]
        }
        assert describes_targets(document) == {"SPDXRef-root"}

    def test_root_package_detection(self):
        """Test the three ways a package is recognised as the repository itself."""
        assert is_root_package({"SPDXID": "SPDXRef-DOCUMENT"})
        assert is_root_package({"SPDXID": "SPDXRef-x", "name": "com.github.acme/web"})
        assert is_root_package({"SPDXID": "SPDXRef-root", "name": "web"}, {"SPDXRef-root"})
        assert not is_root_package({"SPDXID": "SPDXRef-a", "name": "lodash"}, {"SPDXRef-root"})

    def test_package_without_purl(self):
        """Test that packages without a purl reference return None."""
        assert package_purl({"externalRefs": [{"referenceType": "cpe23Type", "referenceLocator": "cpe:2.3:a"}]}) is None
        assert package_purl({}) is None
