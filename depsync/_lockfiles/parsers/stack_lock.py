"""Parser for stack.yaml.lock files (Haskell Stack)."""

import re

import yaml

from ..models import DependencyCollector, Ecosystem, ParsedDependency

# acme-missiles-0.3@sha256:2ba66a09...,613
_HACKAGE_RE = re.compile(r"^(.+)-(\d(?:[\d.]*\d)?)@")


class StackLockParser:
    """Parser for stack.yaml.lock files.

    packages:
    - completed:
        hackage: acme-missiles-0.3@sha256:2ba66a09...,613
        pantry-tree: {...}
      original:
        hackage: acme-missiles-0.3
    """

    name = "stack-lock"
    supported_files = ("stack.yaml.lock",)
    ecosystem = Ecosystem.HACKAGE

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = yaml.safe_load(content)
        collector = DependencyCollector(self.ecosystem)

        if not isinstance(data, dict):
            return []

        for entry in data.get("packages") or []:
            completed = entry.get("completed") if isinstance(entry, dict) else None
            hackage = completed.get("hackage") if isinstance(completed, dict) else None
            if not isinstance(hackage, str):
                continue
            match = _HACKAGE_RE.match(hackage.strip())
            if match:
                collector.add(match.group(1), match.group(2), is_direct=False)

        return collector.dependencies
