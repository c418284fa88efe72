"""Tests for SPDX package extraction and dependency depth classification."""

import json

from depsync._graph import DependencyGraphWriter, Depth, InMemoryGraphStore, extract_package_info
from depsync._graph.classifier import direct_purls
from depsync._lockfiles import parse_lockfile
from depsync.spdx import build_spdx_document


def spdx_package(spdx_id, name, version="", purl=None, license="NOASSERTION", supplier="NOASSERTION"):
    package = {
        "SPDXID": spdx_id,
        "name": name,
        "versionInfo": version,
        "licenseDeclared": license,
        "supplier": supplier,
    }
    if purl:
        package["externalRefs"] = [
            {"referenceCategory": "PACKAGE-MANAGER", "referenceType": "purl", "referenceLocator": purl}
        ]
    return package


def github_document(packages, relationships):
    """A document shaped like the GitHub dependency-graph export."""
    return {
        "sbom": {
            "spdxVersion": "SPDX-2.3",
            "SPDXID": "SPDXRef-DOCUMENT",
            "packages": [spdx_package("SPDXRef-github-acme-web", "com.github.acme/web")] + packages,
            "relationships": relationships,
        }
    }


def rel(source, target, kind="DEPENDS_ON"):
    return {"spdxElementId": source, "relatedSpdxElement": target, "relationshipType": kind}


class TestExtractPackageInfo:
    """Tests for extract_package_info."""

    def test_purl_from_external_ref(self):
        """Test that the purl external ref drives purl and ecosystem."""
        info = extract_package_info(
            spdx_package("SPDXRef-1", "npm:lodash", "4.17.21", purl="pkg:npm/lodash@4.17.21", license="MIT")
        )
        assert info.purl == "pkg:npm/lodash@4.17.21"
        assert info.ecosystem == "npm"
        assert info.name == "lodash"
        assert info.license == "MIT"

    def test_purl_synthesised_without_ref(self):
        """Test that a package without purl gets an unknown-ecosystem purl."""
        info = extract_package_info(spdx_package("SPDXRef-1", "left-pad", "1.3.0"))
        assert info.ecosystem == "unknown"
        assert info.purl == "pkg:unknown/left-pad@1.3.0"

    def test_placeholders_never_overwrite(self):
        """Test that NOASSERTION license and supplier become None attributes."""
        attrs = extract_package_info(spdx_package("SPDXRef-1", "x", "1.0", purl="pkg:npm/x@1.0")).node_attrs()
        assert attrs["license"] is None
        assert attrs["supplier"] is None


class TestDirectPurls:
    """Tests for direct_purls."""

    def test_no_relationships(self):
        """Test that missing relationship data means unknown."""
        assert direct_purls({"packages": []}, {}) is None

    def test_no_describes(self):
        """Test that DEPENDS_ON without DESCRIBES means unknown."""
        document = {"relationships": [rel("SPDXRef-DOCUMENT", "SPDXRef-a")]}
        assert direct_purls(document, {"SPDXRef-a": "pkg:npm/a@1"}) is None

    def test_no_direct_edges(self):
        """Test that DESCRIBES without any root DEPENDS_ON means unknown."""
        document = {"relationships": [rel("SPDXRef-DOCUMENT", "SPDXRef-root", "DESCRIBES")]}
        assert direct_purls(document, {}) is None

    def test_edges_from_described_root(self):
        """Test that only edges leaving a root element count as direct."""
        document = {
            "relationships": [
                rel("SPDXRef-DOCUMENT", "SPDXRef-root", "DESCRIBES"),
                rel("SPDXRef-root", "SPDXRef-a"),
                rel("SPDXRef-a", "SPDXRef-b"),
            ]
        }
        mapping = {"SPDXRef-a": "pkg:npm/a@1", "SPDXRef-b": "pkg:npm/b@1"}
        assert direct_purls(document, mapping) == {"pkg:npm/a@1"}


class TestDependencyGraphWriter:
    """Tests for DependencyGraphWriter."""

    def setup_method(self):
        self.store = InMemoryGraphStore()
        self.writer = DependencyGraphWriter(self.store)

    def test_github_export_classification(self):
        """Test direct and transitive classification from a GitHub-style export."""
        document = github_document(
            [
                spdx_package("SPDXRef-npm-express", "npm:express", "4.18.2", purl="pkg:npm/express@4.18.2"),
                spdx_package("SPDXRef-npm-debug", "npm:debug", "2.6.9", purl="pkg:npm/debug@2.6.9"),
            ],
            [
                rel("SPDXRef-DOCUMENT", "SPDXRef-github-acme-web", "DESCRIBES"),
                rel("SPDXRef-github-acme-web", "SPDXRef-npm-express"),
                rel("SPDXRef-npm-express", "SPDXRef-npm-debug"),
            ],
        )
        result = self.writer.write("web", document)

        assert result.package_count == 2
        assert result.depth_classified is True
        assert (result.direct_count, result.transitive_count) == (1, 1)
        assert self.store.get_edge_depths("web") == {
            "pkg:npm/express@4.18.2": Depth.DIRECT,
            "pkg:npm/debug@2.6.9": Depth.TRANSITIVE,
        }

    def test_package_lock_v3_lodash_is_direct(self):
        """Test that a top-level lodash install in package-lock v3 ends up DIRECT."""
        content = json.dumps(
            {
                "lockfileVersion": 3,
                "packages": {
                    "": {"name": "web"},
                    "node_modules/lodash": {"version": "4.17.21"},
                    "node_modules/express": {"version": "4.18.2"},
                    "node_modules/express/node_modules/debug": {"version": "2.6.9"},
                },
            }
        )
        dependencies = parse_lockfile("package-lock.json", content).dependencies
        document = build_spdx_document("acme", "web", dependencies)

        self.writer.write("web", document)
        depths = self.store.get_edge_depths("web")

        assert depths["pkg:npm/lodash@4.17.21"] is Depth.DIRECT
        assert depths["pkg:npm/express@4.18.2"] is Depth.DIRECT
        assert depths["pkg:npm/debug@2.6.9"] is Depth.TRANSITIVE

    def test_no_relationships_leaves_depth_unset(self):
        """Test that depth is not guessed without relationship data."""
        dependencies = parse_lockfile("Cargo.lock", '[[package]]\nname = "serde"\nversion = "1.0.193"\n').dependencies
        document = build_spdx_document("acme", "crate", dependencies, relationships=False)

        result = self.writer.write("crate", document)

        assert result.depth_classified is False
        assert self.store.get_edge_depths("crate") == {"pkg:cargo/serde@1.0.193": None}

    def test_every_edge_classified_including_previous_sync(self):
        """Test that purls from an earlier sync are reclassified as transitive."""
        first = github_document(
            [spdx_package("SPDXRef-a", "npm:a", "1.0.0", purl="pkg:npm/a@1.0.0")],
            [rel("SPDXRef-DOCUMENT", "SPDXRef-DOCUMENT", "DESCRIBES"), rel("SPDXRef-DOCUMENT", "SPDXRef-a")],
        )
        second = github_document(
            [spdx_package("SPDXRef-b", "npm:b", "2.0.0", purl="pkg:npm/b@2.0.0")],
            [rel("SPDXRef-DOCUMENT", "SPDXRef-DOCUMENT", "DESCRIBES"), rel("SPDXRef-DOCUMENT", "SPDXRef-b")],
        )
        self.writer.write("web", first)
        result = self.writer.write("web", second)

        depths = self.store.get_edge_depths("web")
        assert all(depth is not None for depth in depths.values())
        assert depths["pkg:npm/b@2.0.0"] is Depth.DIRECT
        assert depths["pkg:npm/a@1.0.0"] is Depth.TRANSITIVE
        assert result.direct_count + result.transitive_count == len(depths)

    def test_duplicate_purls_written_once(self):
        """Test that two packages with the same purl produce one node and edge."""
        document = github_document(
            [
                spdx_package("SPDXRef-1", "npm:ms", "2.1.3", purl="pkg:npm/ms@2.1.3"),
                spdx_package("SPDXRef-2", "npm:ms", "2.1.3", purl="pkg:npm/ms@2.1.3"),
            ],
            [],
        )
        result = self.writer.write("web", document)
        assert result.package_count == 1
        assert len(self.store) == 1

    def test_shared_nodes_across_products(self):
        """Test that two products share one node per purl."""
        document = github_document(
            [spdx_package("SPDXRef-1", "npm:ms", "2.1.3", purl="pkg:npm/ms@2.1.3")],
            [],
        )
        self.writer.write("web", document)
        self.writer.write("api", document)
        assert len(self.store) == 1
        assert self.store.get_product_purls("api") == ["pkg:npm/ms@2.1.3"]

    def test_resync_keeps_enriched_license(self):
        """Test that a NOASSERTION license on re-sync does not erase an enriched one."""
        document = github_document([spdx_package("SPDXRef-1", "npm:ms", "2.1.3", purl="pkg:npm/ms@2.1.3")], [])
        self.writer.write("web", document)
        self.store.update_node("pkg:npm/ms@2.1.3", {"license": "MIT", "license_source": "registry.npmjs.org"})

        self.writer.write("web", document)
        assert self.store.get_node("pkg:npm/ms@2.1.3").license == "MIT"
