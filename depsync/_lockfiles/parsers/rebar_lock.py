"""Parser for rebar.lock files (Erlang)."""

import re

from ..models import DependencyCollector, Ecosystem, ParsedDependency

# {<<"cowboy">>,{pkg,<<"cowboy">>,<<"2.10.0">>},0}
_PKG_RE = re.compile(r'\{<<"([^"]+)">>,\s*\{pkg,\s*<<"([^"]+)">>,\s*<<"([^"]+)">>')


class RebarLockParser:
    name = "rebar-lock"
    supported_files = ("rebar.lock",)
    ecosystem = Ecosystem.HEX

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        collector = DependencyCollector(self.ecosystem)
        for match in _PKG_RE.finditer(content):
            collector.add(match.group(1), match.group(3), is_direct=True)
        return collector.dependencies
