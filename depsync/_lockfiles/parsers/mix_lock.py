"""Parser for mix.lock files (Elixir)."""

import re

from ..models import DependencyCollector, Ecosystem, ParsedDependency

# "jason": {:hex, :jason, "1.4.1", "af1504e3...", [:mix], [...], "hexpm", "..."}
_HEX_RE = re.compile(r'"([^"]+)":\s*\{:hex,\s*:([^,]+),\s*"([^"]+)"')


class MixLockParser:
    name = "mix-lock"
    supported_files = ("mix.lock",)
    ecosystem = Ecosystem.HEX

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        collector = DependencyCollector(self.ecosystem)
        for match in _HEX_RE.finditer(content):
            collector.add(match.group(1), match.group(3), is_direct=True)
        return collector.dependencies
