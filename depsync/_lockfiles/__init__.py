"""Lockfile and manifest parsing.

Turns the raw content of a dependency file into a deduplicated list of
ParsedDependency objects with canonical Package URLs.

Supported files, in fallback priority order:
- npm: package-lock.json, yarn.lock, pnpm-lock.yaml
- Python: Pipfile.lock, poetry.lock
- Go, Rust, Ruby: go.sum, Cargo.lock, Gemfile.lock
- Java, .NET, PHP, Swift, Dart, Elixir, Terraform: build.gradle.lock,
  packages.lock.json, composer.lock, Package.resolved, pubspec.lock,
  mix.lock, .terraform.lock.hcl
- C/C++, Erlang, Haskell, R, Julia, Nix: conan.lock, vcpkg.json,
  rebar.lock, cabal.project.freeze, stack.yaml.lock, renv.lock,
  Manifest.toml, flake.lock
- Manifests: requirements.txt, pyproject.toml, go.mod, Cargo.toml,
  pom.xml, Dockerfile

Example usage:
    from depsync._lockfiles import parse_lockfile

    result = parse_lockfile("Cargo.lock", content)
    for dep in result.dependencies:
        print(dep.purl)
"""

from .models import (
    DependencyCollector,
    Ecosystem,
    LockfileParseResult,
    ParsedDependency,
    build_purl,
    strip_version_prefix,
)
from .parsers import (
    CabalFreezeParser,
    CargoLockParser,
    CargoTomlParser,
    ComposerLockParser,
    ConanLockParser,
    DockerfileParser,
    GemfileLockParser,
    GoModParser,
    GoSumParser,
    GradleLockParser,
    JuliaManifestParser,
    MixLockParser,
    NixFlakeLockParser,
    NuGetLockParser,
    PackageLockParser,
    PipfileLockParser,
    PnpmLockParser,
    PoetryLockParser,
    PomXmlParser,
    PubspecLockParser,
    PyprojectTomlParser,
    RebarLockParser,
    RenvLockParser,
    RequirementsTxtParser,
    StackLockParser,
    SwiftPackageResolvedParser,
    TerraformLockParser,
    VcpkgJsonParser,
    YarnLockParser,
)
from .protocol import LockfileParser
from .registry import ParserRegistry


def create_default_registry() -> ParserRegistry:
    """Create a registry with all built-in parsers in priority order."""
    registry = ParserRegistry()
    # lockfiles
    registry.register(PackageLockParser())
    registry.register(YarnLockParser())
    registry.register(PnpmLockParser())
    registry.register(PipfileLockParser())
    registry.register(PoetryLockParser())
    registry.register(GoSumParser())
    registry.register(CargoLockParser())
    registry.register(GemfileLockParser())
    registry.register(GradleLockParser())
    registry.register(NuGetLockParser())
    registry.register(ComposerLockParser())
    registry.register(SwiftPackageResolvedParser())
    registry.register(PubspecLockParser())
    registry.register(MixLockParser())
    registry.register(TerraformLockParser())
    registry.register(ConanLockParser())
    registry.register(VcpkgJsonParser())
    registry.register(RebarLockParser())
    registry.register(CabalFreezeParser())
    registry.register(StackLockParser())
    registry.register(RenvLockParser())
    registry.register(JuliaManifestParser())
    registry.register(NixFlakeLockParser())
    # manifests
    registry.register(RequirementsTxtParser())
    registry.register(PyprojectTomlParser())
    registry.register(GoModParser())
    registry.register(CargoTomlParser())
    registry.register(PomXmlParser())
    registry.register(DockerfileParser())
    return registry


_default_registry: ParserRegistry | None = None


def parse_lockfile(filename: str, content: str) -> LockfileParseResult:
    """Parse a dependency file with the default registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry.parse(filename, content)


__all__ = [
    "parse_lockfile",
    "create_default_registry",
    "ParserRegistry",
    "LockfileParser",
    "LockfileParseResult",
    "ParsedDependency",
    "DependencyCollector",
    "Ecosystem",
    "build_purl",
    "strip_version_prefix",
]
