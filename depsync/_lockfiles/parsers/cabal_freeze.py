"""Parser for cabal.project.freeze files (Haskell)."""

import re

from ..models import DependencyCollector, Ecosystem, ParsedDependency

# constraints: any.aeson ==2.1.2.1,
#              any.base ==4.17.2.0,
_CONSTRAINT_RE = re.compile(r"any\.([^\s]+)\s+==([^\s,]+)")


class CabalFreezeParser:
    name = "cabal-freeze"
    supported_files = ("cabal.project.freeze",)
    ecosystem = Ecosystem.HACKAGE

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        collector = DependencyCollector(self.ecosystem)
        for match in _CONSTRAINT_RE.finditer(content):
            collector.add(match.group(1), match.group(2), is_direct=False)
        return collector.dependencies
