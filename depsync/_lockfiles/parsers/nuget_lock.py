"""Parser for NuGet packages.lock.json files (.NET)."""

import json

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class NuGetLockParser:
    """Parser for packages.lock.json files.

    {
      "version": 1,
      "dependencies": {
        "net8.0": {
          "Newtonsoft.Json": {"type": "Direct", "requested": "[13.0.3, )", "resolved": "13.0.3"}
        }
      }
    }
    """

    name = "nuget-lock"
    supported_files = ("packages.lock.json",)
    ecosystem = Ecosystem.NUGET

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = json.loads(content)
        collector = DependencyCollector(self.ecosystem)

        for framework_deps in (data.get("dependencies") or {}).values():
            if not isinstance(framework_deps, dict):
                continue
            for name, info in framework_deps.items():
                if not isinstance(info, dict):
                    continue
                version = info.get("resolved") or info.get("version") or ""
                collector.add(name, version, is_direct=info.get("type") == "Direct")

        return collector.dependencies
