"""Parser for pip requirements.txt manifests."""

import re

from ..models import DependencyCollector, Ecosystem, ParsedDependency

_SKIP_PREFIXES = ("-r ", "-e ", "-i ", "-c ", "-f ", "--")
_PINNED_RE = re.compile(r"^([A-Za-z0-9_][A-Za-z0-9._-]*)\s*(===|==|>=|~=|<=|!=)\s*([^\s;,]+)")
_NAME_ONLY_RE = re.compile(r"^([A-Za-z0-9_][A-Za-z0-9._-]*)\s*$")


class RequirementsTxtParser:
    """Parser for requirements.txt files.

    Handles pins (requests==2.31.0), lower bounds (flask>=2.0), extras
    (uvicorn[standard]==0.23.0) and environment markers. Include files,
    editable installs and index options are skipped; they cannot be
    resolved from a single file. Bare names get an empty version.
    """

    name = "requirements-txt"
    supported_files = ("requirements.txt",)
    ecosystem = Ecosystem.PIP

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        collector = DependencyCollector(self.ecosystem)

        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith("#") or line.startswith(_SKIP_PREFIXES):
                continue

            requirement = line.split("#")[0].split(";")[0].strip()
            requirement = re.sub(r"\[[^\]]*\]", "", requirement, count=1)
            if not requirement:
                continue

            pinned = _PINNED_RE.match(requirement)
            if pinned:
                collector.add(pinned.group(1), pinned.group(3), is_direct=True)
                continue

            bare = _NAME_ONLY_RE.match(requirement)
            if bare:
                collector.add(bare.group(1), "", is_direct=True)

        return collector.dependencies
