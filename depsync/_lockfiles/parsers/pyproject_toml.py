"""Parser for pyproject.toml manifests (PEP 621 and Poetry)."""

import re
import tomllib

from ..models import DependencyCollector, Ecosystem, ParsedDependency, strip_version_prefix

_PEP508_RE = re.compile(r"^([A-Za-z0-9_][A-Za-z0-9._-]*)\s*(?:\[[^\]]*\])?\s*(?:(==|>=|~=)\s*([^\s,;]+))?")


class PyprojectTomlParser:
    """Parser for pyproject.toml files.

    Reads PEP 621 [project] dependencies and optional-dependencies, then
    Poetry's [tool.poetry.dependencies] and dependency groups. A package
    named in more than one place is reported once (case-insensitive).
    """

    name = "pyproject-toml"
    supported_files = ("pyproject.toml",)
    ecosystem = Ecosystem.PIP

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = tomllib.loads(content)
        collector = DependencyCollector(self.ecosystem)

        project = data.get("project") or {}
        requirements = list(project.get("dependencies") or [])
        for extra in (project.get("optional-dependencies") or {}).values():
            requirements.extend(extra or [])

        for requirement in requirements:
            if not isinstance(requirement, str):
                continue
            match = _PEP508_RE.match(requirement.split(";")[0].strip())
            if match:
                name, version = match.group(1), match.group(3) or ""
                collector.add(name, version, is_direct=True, key=name.lower())

        poetry = (data.get("tool") or {}).get("poetry") or {}
        sections = [poetry.get("dependencies") or {}]
        for group in (poetry.get("group") or {}).values():
            sections.append((group or {}).get("dependencies") or {})

        for section in sections:
            for name, spec in section.items():
                if name.lower() == "python":
                    continue
                if isinstance(spec, dict):
                    spec = spec.get("version")
                if not isinstance(spec, str):
                    continue
                collector.add(name, strip_version_prefix(spec), is_direct=True, key=name.lower())

        return collector.dependencies
