"""Parser for Cargo.toml manifests (Rust)."""

import tomllib

from ..models import DependencyCollector, Ecosystem, ParsedDependency, strip_version_prefix


class CargoTomlParser:
    """Parser for Cargo.toml files.

    Collects every table whose name ends in "dependencies": [dependencies],
    [dev-dependencies], [build-dependencies], [workspace.dependencies] and
    [target.'cfg(...)'.dependencies]. Path and git dependencies without a
    version are skipped.
    """

    name = "cargo-toml"
    supported_files = ("Cargo.toml",)
    ecosystem = Ecosystem.CARGO

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = tomllib.loads(content)
        collector = DependencyCollector(self.ecosystem)

        for table in self._dependency_tables(data):
            for name, spec in table.items():
                if isinstance(spec, dict):
                    spec = spec.get("version")
                if isinstance(spec, str):
                    collector.add(name, strip_version_prefix(spec), is_direct=True)

        return collector.dependencies

    def _dependency_tables(self, node: dict) -> list[dict]:
        tables = []
        for key, value in node.items():
            if not isinstance(value, dict):
                continue
            if key.endswith("dependencies"):
                tables.append(value)
            else:
                tables.extend(self._dependency_tables(value))
        return tables
