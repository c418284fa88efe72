"""Parser for flake.lock files (Nix)."""

import json

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class NixFlakeLockParser:
    """Parser for flake.lock files.

    {
      "nodes": {
        "nixpkgs": {"locked": {"owner": "NixOS", "repo": "nixpkgs", "rev": "abc123", "type": "github"}},
        "root": {"inputs": {"nixpkgs": "nixpkgs"}}
      },
      "root": "root"
    }
    """

    name = "nix-flake-lock"
    supported_files = ("flake.lock",)
    ecosystem = Ecosystem.NIX

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        data = json.loads(content)
        collector = DependencyCollector(self.ecosystem)
        root = data.get("root", "root")

        for key, node in (data.get("nodes") or {}).items():
            if key == root or not isinstance(node, dict):
                continue
            locked = node.get("locked") or {}
            owner = locked.get("owner") or ""
            repo = locked.get("repo") or ""
            if not owner and not repo:
                continue
            name = f"{owner}/{repo}" if owner and repo else repo or owner
            collector.add(name, locked.get("rev") or "", is_direct=False)

        return collector.dependencies
