"""Parser for pnpm-lock.yaml files (pnpm)."""

import yaml

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class PnpmLockParser:
    """Parser for pnpm-lock.yaml files.

    Package keys vary by lockfile version:
    packages:
      /lodash/4.17.21:            # v5
      /@scope/name@1.2.3:         # v6
      '@scope/name@1.2.3':        # v9
      /foo@1.0.0(react@18.2.0):   # peer suffix

    v9 also has a snapshots section keyed the same way.
    """

    name = "pnpm-lock"
    supported_files = ("pnpm-lock.yaml",)
    ecosystem = Ecosystem.NPM

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = yaml.safe_load(content)
        collector = DependencyCollector(self.ecosystem)

        if not isinstance(data, dict):
            return []

        for section in ("packages", "snapshots"):
            entries = data.get(section) or {}
            if not isinstance(entries, dict):
                continue
            for key in entries:
                name, version = self._parse_package_key(str(key))
                if name and version:
                    collector.add(name, version, is_direct=False)

        return collector.dependencies

    @staticmethod
    def _parse_package_key(key: str) -> tuple[str | None, str | None]:
        """Split a pnpm package key into name and version."""
        if key.startswith("/"):
            key = key[1:]
        if "(" in key:
            key = key.split("(")[0]

        # v5 style: name/version or @scope/name/version, peers after "_"
        if "/" in key:
            name, _, last = key.rpartition("/")
            version = last.split("_")[0]
            if version[:1].isdigit() and "@" not in version:
                return name, version

        at_pos = key.find("@", 1) if key.startswith("@") else key.find("@")
        if at_pos > 0:
            return key[:at_pos], key[at_pos + 1 :]
        return None, None
