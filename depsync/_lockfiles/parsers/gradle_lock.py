"""Parser for Gradle dependency lockfiles."""

import re

from ..models import DependencyCollector, Ecosystem, ParsedDependency

_COORD_RE = re.compile(r"^([^:\s]+):([^:\s]+):([^=\s]+)")


class GradleLockParser:
    """Parser for build.gradle.lock files.

    # This is a Gradle generated file for dependency locking.
    com.google.guava:guava:32.1.2-jre=compileClasspath,runtimeClasspath
    empty=annotationProcessor
    """

    name = "gradle-lock"
    supported_files = ("build.gradle.lock",)
    ecosystem = Ecosystem.MAVEN

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        collector = DependencyCollector(self.ecosystem)

        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            match = _COORD_RE.match(line)
            if match:
                group, artifact, version = match.groups()
                collector.add(f"{group}:{artifact}", version, is_direct=False)

        return collector.dependencies
