"""Parser for Package.resolved files (Swift Package Manager)."""

import json

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class SwiftPackageResolvedParser:
    """Parser for Package.resolved files.

    Version 2+ has a top-level "pins" array keyed by "identity";
    version 1 nests it as object.pins keyed by "package". A pin on a
    branch has only a revision, which is used as the version.
    """

    name = "swift-package-resolved"
    supported_files = ("Package.resolved",)
    ecosystem = Ecosystem.SWIFT

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = json.loads(content)
        collector = DependencyCollector(self.ecosystem)

        pins = data.get("pins")
        if not isinstance(pins, list):
            pins = (data.get("object") or {}).get("pins")
        if not isinstance(pins, list):
            return []

        for pin in pins:
            name = pin.get("identity") or pin.get("package") or ""
            state = pin.get("state") or {}
            version = state.get("version") or state.get("revision") or ""
            collector.add(name, version, is_direct=True)

        return collector.dependencies
