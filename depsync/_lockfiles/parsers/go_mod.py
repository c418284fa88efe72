"""Parser for go.mod manifests."""

import re

from ..models import DependencyCollector, Ecosystem, ParsedDependency, strip_version_prefix

_SINGLE_REQUIRE_RE = re.compile(r"^require\s+(\S+)\s+(\S+)")
_BLOCK_ENTRY_RE = re.compile(r"^(\S+)\s+(\S+)")


class GoModParser:
    """Parser for go.mod files.

    require golang.org/x/text v0.14.0
    require (
        github.com/gorilla/mux v1.8.0
        golang.org/x/sys v0.15.0 // indirect
    )

    Entries marked // indirect are transitive, everything else direct.
    """

    name = "go-mod"
    supported_files = ("go.mod",)
    ecosystem = Ecosystem.GO

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        collector = DependencyCollector(self.ecosystem)
        in_block = False

        for line in content.splitlines():
            line = line.strip()
            if line.startswith("require ("):
                in_block = True
                continue
            if in_block and line == ")":
                in_block = False
                continue

            if in_block:
                if not line or line.startswith("//"):
                    continue
                match = _BLOCK_ENTRY_RE.match(line)
            else:
                match = _SINGLE_REQUIRE_RE.match(line)

            if match:
                collector.add(
                    match.group(1),
                    strip_version_prefix(match.group(2)),
                    is_direct="// indirect" not in line,
                )

        return collector.dependencies
