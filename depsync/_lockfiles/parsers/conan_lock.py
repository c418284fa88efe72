"""Parser for conan.lock files (C/C++)."""

import json

from ..models import DependencyCollector, Ecosystem, ParsedDependency


def _split_ref(ref: str) -> tuple[str, str] | None:
    """Split 'zlib/1.3#rev%ts' or 'fmt/10.1.1@user/channel' into (name, version)."""
    cleaned = ref.split("#")[0].split("@")[0]
    name, sep, version = cleaned.partition("/")
    if not sep or not name:
        return None
    return name, version


class ConanLockParser:
    """Parser for conan.lock files.

    Conan 2 lockfiles list references under "requires" and "build_requires";
    Conan 1 lockfiles keep them in graph_lock.nodes[*].ref.
    """

    name = "conan-lock"
    supported_files = ("conan.lock",)
    ecosystem = Ecosystem.CONAN

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = json.loads(content)
        collector = DependencyCollector(self.ecosystem)

        refs: list[str] = []
        for section in ("requires", "build_requires"):
            if isinstance(data.get(section), list):
                refs.extend(r for r in data[section] if isinstance(r, str))

        nodes = (data.get("graph_lock") or {}).get("nodes") or {}
        for node in nodes.values():
            if isinstance(node, dict) and node.get("ref"):
                refs.append(node["ref"])

        for ref in refs:
            parsed = _split_ref(ref)
            if parsed:
                collector.add(parsed[0], parsed[1], is_direct=False)

        return collector.dependencies
