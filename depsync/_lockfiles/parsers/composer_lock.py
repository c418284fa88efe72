"""Parser for composer.lock files (PHP)."""

import json

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class ComposerLockParser:
    name = "composer-lock"
    supported_files = ("composer.lock",)
    ecosystem = Ecosystem.COMPOSER

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = json.loads(content)
        collector = DependencyCollector(self.ecosystem)

        for pkg in (data.get("packages") or []) + (data.get("packages-dev") or []):
            name = pkg.get("name")
            if not name:
                continue
            version = pkg.get("version") or ""
            if version[:1] in ("v", "V"):
                version = version[1:]
            collector.add(name, version, is_direct=False)

        return collector.dependencies
