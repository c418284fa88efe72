"""Parser for Pipfile.lock files (Pipenv)."""

import json

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class PipfileLockParser:
    """Parser for Pipfile.lock files.

    {"default": {"requests": {"version": "==2.31.0"}}, "develop": {...}}

    Every locked entry is treated as direct.
    """

    name = "pipfile-lock"
    supported_files = ("Pipfile.lock",)
    ecosystem = Ecosystem.PIP

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = json.loads(content)
        collector = DependencyCollector(self.ecosystem)

        for section in ("default", "develop"):
            for name, meta in (data.get(section) or {}).items():
                if not isinstance(meta, dict):
                    continue
                version = (meta.get("version") or "").removeprefix("==")
                if version:
                    collector.add(name, version, is_direct=True)

        return collector.dependencies
