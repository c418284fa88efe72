"""Parser for Manifest.toml files (Julia)."""

import tomllib

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class JuliaManifestParser:
    """Parser for Julia Manifest.toml files.

    Format 2.0 nests entries under deps:
    [[deps.JSON]]
    uuid = "682c06a0-de6a-54ab-a142-c8b1cf79cde6"
    version = "0.21.4"

    Format 1.0 puts [[JSON]] arrays at the top level. Standard library
    entries carry no version and are skipped.
    """

    name = "julia-manifest"
    supported_files = ("Manifest.toml",)
    ecosystem = Ecosystem.JULIA

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = tomllib.loads(content)
        collector = DependencyCollector(self.ecosystem)

        entries = data.get("deps") if "manifest_format" in data else data
        if not isinstance(entries, dict):
            return []

        for name, versions in entries.items():
            if not isinstance(versions, list):
                continue
            for entry in versions:
                if isinstance(entry, dict) and entry.get("version"):
                    collector.add(name, entry["version"], is_direct=False)

        return collector.dependencies
