"""Parser for Cargo.lock files (Rust)."""

import tomllib

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class CargoLockParser:
    """Parser for Cargo.lock files.

    [[package]]
    name = "serde"
    version = "1.0.193"
    source = "registry+https://github.com/rust-lang/crates.io-index"

    The workspace's own crates are listed too and kept; Cargo.lock
    does not say which entries are direct.
    """

    name = "cargo-lock"
    supported_files = ("Cargo.lock",)
    ecosystem = Ecosystem.CARGO

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = tomllib.loads(content)
        collector = DependencyCollector(self.ecosystem)

        for pkg in data.get("package", []):
            name = pkg.get("name")
            version = pkg.get("version")
            if name and version:
                collector.add(name, version, is_direct=False)

        return collector.dependencies
