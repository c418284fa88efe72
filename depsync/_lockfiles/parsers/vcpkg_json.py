"""Parser for vcpkg.json manifests (C/C++)."""

import json

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class VcpkgJsonParser:
    """Parser for vcpkg.json files.

    {
      "dependencies": ["fmt", {"name": "boost-asio", "version>=": "1.83.0"}],
      "overrides": [{"name": "zlib", "version": "1.3"}]
    }

    Overrides are only added for ports not already declared.
    """

    name = "vcpkg-json"
    supported_files = ("vcpkg.json",)
    ecosystem = Ecosystem.VCPKG

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = json.loads(content)
        collector = DependencyCollector(self.ecosystem)
        declared: set[str] = set()

        for dep in data.get("dependencies") or []:
            if isinstance(dep, str):
                name, version = dep, ""
            elif isinstance(dep, dict):
                name = dep.get("name") or ""
                version = dep.get("version>=") or dep.get("version") or ""
            else:
                continue
            if collector.add(name, version, is_direct=True):
                declared.add(name)

        for override in data.get("overrides") or []:
            if isinstance(override, dict) and override.get("name") and override["name"] not in declared:
                collector.add(override["name"], override.get("version") or "", is_direct=True)

        return collector.dependencies
