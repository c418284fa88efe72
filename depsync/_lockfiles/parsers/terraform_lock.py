"""Parser for .terraform.lock.hcl files (Terraform providers)."""

import re

from ..models import DependencyCollector, Ecosystem, ParsedDependency

_PROVIDER_RE = re.compile(r'provider\s+"([^"]+)"\s*\{([^}]*)\}')
_VERSION_RE = re.compile(r'version\s*=\s*"([^"]+)"')

DEFAULT_REGISTRY = "registry.terraform.io/"


class TerraformLockParser:
    """Parser for .terraform.lock.hcl files.

    provider "registry.terraform.io/hashicorp/aws" {
      version     = "5.31.0"
      constraints = "~> 5.0"
      hashes = [...]
    }

    Providers from the default public registry are shortened to
    namespace/type.
    """

    name = "terraform-lock"
    supported_files = (".terraform.lock.hcl",)
    ecosystem = Ecosystem.TERRAFORM

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        collector = DependencyCollector(self.ecosystem)

        for match in _PROVIDER_RE.finditer(content):
            name = match.group(1).removeprefix(DEFAULT_REGISTRY)
            version_match = _VERSION_RE.search(match.group(2))
            version = version_match.group(1) if version_match else ""
            collector.add(name, version, is_direct=True)

        return collector.dependencies
