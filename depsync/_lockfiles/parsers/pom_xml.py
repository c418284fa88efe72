"""Parser for Maven pom.xml manifests."""

import xml.etree.ElementTree as ET

from ..models import DependencyCollector, Ecosystem, ParsedDependency


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class PomXmlParser:
    """Parser for pom.xml files.

    Every <dependency> element with a literal version is reported as direct.
    Versions that reference a property (${jackson.version}) cannot be
    resolved without the parent POM and are skipped.
    """

    name = "maven-pom"
    supported_files = ("pom.xml",)
    ecosystem = Ecosystem.MAVEN

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        root = ET.fromstring(content)
        collector = DependencyCollector(self.ecosystem)

        for element in root.iter():
            if _local(element.tag) != "dependency":
                continue
            fields = {_local(child.tag): (child.text or "").strip() for child in element}
            group = fields.get("groupId")
            artifact = fields.get("artifactId")
            version = fields.get("version")
            if not group or not artifact or not version or "$" in version:
                continue
            collector.add(f"{group}:{artifact}", version, is_direct=True)

        return collector.dependencies
