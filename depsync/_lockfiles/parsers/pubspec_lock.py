"""Parser for pubspec.lock files (Dart/Flutter)."""

import yaml

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class PubspecLockParser:
    """Parser for pubspec.lock files.

    packages:
      http:
        dependency: "direct main"
        source: hosted
        version: "1.1.0"
    """

    name = "pubspec-lock"
    supported_files = ("pubspec.lock",)
    ecosystem = Ecosystem.PUB

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = yaml.safe_load(content)
        collector = DependencyCollector(self.ecosystem)

        if not isinstance(data, dict):
            return []

        for name, info in (data.get("packages") or {}).items():
            if isinstance(info, dict) and info.get("version"):
                collector.add(str(name), str(info["version"]), is_direct=False)

        return collector.dependencies
