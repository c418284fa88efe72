"""Parser for package-lock.json files (npm)."""

import json

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class PackageLockParser:
    """Parser for package-lock.json files.

    lockfileVersion 2 and 3 store a flat "packages" map keyed by install path:
    {
      "packages": {
        "": {...root...},
        "node_modules/lodash": {"version": "4.17.21"},
        "node_modules/a/node_modules/b": {"version": "1.0.0"}
      }
    }

    A package installed directly under the root node_modules is direct;
    nested installs are transitive. lockfileVersion 1 uses a recursive
    "dependencies" tree instead, whose top level is direct.
    """

    name = "npm-package-lock"
    supported_files = ("package-lock.json",)
    ecosystem = Ecosystem.NPM

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = json.loads(content)
        collector = DependencyCollector(self.ecosystem)

        packages = data.get("packages")
        if data.get("lockfileVersion", 1) >= 2 and isinstance(packages, dict):
            for path, meta in packages.items():
                if not path or not isinstance(meta, dict):
                    continue
                name = path.rsplit("node_modules/", 1)[-1]
                version = meta.get("version")
                if not name or not version:
                    continue
                collector.add(name, version, is_direct=path.count("node_modules/") == 1)
        elif isinstance(data.get("dependencies"), dict):
            self._walk_v1(data["dependencies"], collector, direct=True)

        return collector.dependencies

    def resolved_versions(self, content: str) -> dict[str, str]:
        """Map each package name to its installed version.

        The install at the top of node_modules wins; nested installs only
        fill in names that have no top-level entry.
        """
        versions: dict[str, str] = {}
        for dependency in self.parse(content):
            if dependency.is_direct or dependency.name not in versions:
                versions[dependency.name] = dependency.version
        return versions

    def _walk_v1(self, deps: dict, collector: DependencyCollector, direct: bool) -> None:
        for name, meta in deps.items():
            if not isinstance(meta, dict) or not meta.get("version"):
                continue
            collector.add(name, meta["version"], is_direct=direct)
            nested = meta.get("dependencies")
            if isinstance(nested, dict):
                self._walk_v1(nested, collector, direct=False)
