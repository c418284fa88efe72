"""Parser for Dockerfiles (base images and OS packages)."""

import re

from ..models import DependencyCollector, Ecosystem, ParsedDependency

_FROM_RE = re.compile(r"^FROM\s+(?:--platform=\S+\s+)?(\S+)(?:\s+AS\s+(\S+))?", re.IGNORECASE)
_INSTALL_RES = (
    re.compile(r"(?:apt-get|apt)\s+install\s+(.+)", re.IGNORECASE),
    re.compile(r"apk\s+(?:--\S+\s+)*add\s+(.+)", re.IGNORECASE),
    re.compile(r"(?:yum|dnf)\s+install\s+(.+)", re.IGNORECASE),
)
_COMMAND_SEPARATORS = {"&&", "||", ";", "|"}


def _join_continuations(content: str) -> list[str]:
    lines: list[str] = []
    buffer = ""
    for raw in content.splitlines():
        line = raw.strip()
        if line.endswith("\\"):
            buffer += line[:-1] + " "
        else:
            lines.append(buffer + line)
            buffer = ""
    if buffer:
        lines.append(buffer)
    return lines


def _split_image(image: str) -> tuple[str, str]:
    """Split an image reference into (repository, tag or digest)."""
    if "@" in image:
        repository, digest = image.split("@", 1)
        return repository, digest
    # a colon before the last '/' belongs to a registry port
    slash = image.rfind("/")
    colon = image.rfind(":")
    if colon > slash:
        return image[:colon], image[colon + 1 :]
    return image, ""


class DockerfileParser:
    """Parser for Dockerfiles.

    FROM lines yield docker base images (tag defaults to "latest");
    apt/apt-get install, apk add and yum/dnf install yield system packages
    with the generic purl type. `pkg=1.2` pins are split into name and
    version. Each image:tag and each system package name is reported once.
    """

    name = "dockerfile"
    supported_files = ("Dockerfile",)
    ecosystem = Ecosystem.DOCKER

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        collector = DependencyCollector(self.ecosystem)
        stages: set[str] = set()

        for line in _join_continuations(content):
            if line.startswith("#"):
                continue

            from_match = _FROM_RE.match(line)
            if from_match:
                image, stage = from_match.groups()
                # scratch, build args and earlier build stages are not images
                is_image = not (image.lower() == "scratch" or image.startswith("$") or image.lower() in stages)
                if stage:
                    stages.add(stage.lower())
                if not is_image:
                    continue
                repository, tag = _split_image(image)
                tag = tag or "latest"
                collector.add(repository, tag, is_direct=True, key=f"image:{repository}:{tag}")
                continue

            for install_re in _INSTALL_RES:
                install_match = install_re.search(line)
                if install_match:
                    self._collect_packages(install_match.group(1), collector)
                    break

        return collector.dependencies

    @staticmethod
    def _collect_packages(args: str, collector: DependencyCollector) -> None:
        for token in args.split():
            if token in _COMMAND_SEPARATORS:
                break
            if token.startswith(("-", ">", "<", "$")):
                continue
            name, _, version = token.partition("=")
            if name:
                collector.add(name, version, is_direct=True, ecosystem=Ecosystem.SYSTEM, key=f"system:{name}")
