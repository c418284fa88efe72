"""Parser for poetry.lock files (Poetry)."""

import tomllib

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class PoetryLockParser:
    """Parser for poetry.lock files.

    [[package]]
    name = "requests"
    version = "2.31.0"
    """

    name = "poetry-lock"
    supported_files = ("poetry.lock",)
    ecosystem = Ecosystem.PIP

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
