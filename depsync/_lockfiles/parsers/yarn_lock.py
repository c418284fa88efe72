"""Parser for yarn.lock files (Yarn classic and berry)."""

import re

from ..models import DependencyCollector, Ecosystem, ParsedDependency

_HEADER_RE = re.compile(r'^"?(@?[^@\s,"]+)@')
_VERSION_RE = re.compile(r'^\s+version:?\s+"?([^"\s]+)"?')


class YarnLockParser:
    """Parser for yarn.lock files.

    Entries are blank-line separated blocks:
    "@babel/core@^7.0.0", "@babel/core@^7.1.0":
      version "7.23.0"
      resolved "https://..."

    Berry lockfiles use `version: 7.23.0` and carry a __metadata block,
    which is skipped. yarn.lock does not distinguish direct dependencies.
    """

    name = "yarn-lock"
    supported_files = ("yarn.lock",)
    ecosystem = Ecosystem.NPM

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        collector = DependencyCollector(self.ecosystem)

        for block in re.split(r"\n\s*\n", content.replace("\r\n", "\n")):
            lines = block.strip().split("\n")
            if len(lines) < 2:
                continue
            header = lines[0]
            if header.startswith("#") or header.startswith("__metadata"):
                continue

            name_match = _HEADER_RE.match(header)
            if not name_match:
                continue

            for line in lines[1:]:
                version_match = _VERSION_RE.match(line)
                if version_match:
                    collector.add(name_match.group(1), version_match.group(1), is_direct=False)
                    break

        return collector.dependencies
