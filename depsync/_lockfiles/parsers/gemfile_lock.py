"""Parser for Gemfile.lock files (Bundler)."""

import re

from ..models import DependencyCollector, Ecosystem, ParsedDependency

# Resolved specs are indented exactly four spaces: "    rack (3.0.8)"
_SPEC_RE = re.compile(r"^ {4}(\S+) \((\d[^)]*)\)", re.MULTILINE)


class GemfileLockParser:
    name = "gemfile-lock"
    supported_files = ("Gemfile.lock",)
    ecosystem = Ecosystem.GEM

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        collector = DependencyCollector(self.ecosystem)
        for match in _SPEC_RE.finditer(content):
            collector.add(match.group(1), match.group(2), is_direct=False)
        return collector.dependencies
