"""Parser for renv.lock files (R)."""

import json

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class RenvLockParser:
    """Parser for renv.lock files.

    {"R": {...}, "Packages": {"dplyr": {"Package": "dplyr", "Version": "1.1.4", "Source": "Repository"}}}
    """

    name = "renv-lock"
    supported_files = ("renv.lock",)
    ecosystem = Ecosystem.CRAN

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = json.loads(content)
        collector = DependencyCollector(self.ecosystem)

        for key, info in (data.get("Packages") or {}).items():
            info = info if isinstance(info, dict) else {}
            collector.add(info.get("Package") or key, info.get("Version") or "", is_direct=False)

        return collector.dependencies
