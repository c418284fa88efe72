"""Data models for lockfile and manifest parsing."""

from dataclasses import dataclass, field
from enum import Enum

from packageurl import PackageURL


class Ecosystem(Enum):
    """Package ecosystems recognised by the lockfile parsers.

    The value is the internal ecosystem tag; purl_type gives the
    Package URL type used when building identifiers.
    """

    NPM = "npm"
    PIP = "pip"
    GO = "go"
    CARGO = "cargo"
    GEM = "gem"
    MAVEN = "maven"
    NUGET = "nuget"
    COMPOSER = "composer"
    SWIFT = "swift"
    PUB = "pub"
    HEX = "hex"
    TERRAFORM = "terraform"
    CONAN = "conan"
    VCPKG = "vcpkg"
    HACKAGE = "hackage"
    CRAN = "cran"
    JULIA = "julia"
    NIX = "nix"
    DOCKER = "docker"
    SYSTEM = "system"

    @property
    def purl_type(self) -> str:
        """Return the Package URL type for this ecosystem."""
        return _PURL_TYPES.get(self, self.value)

    @classmethod
    def from_purl_type(cls, purl_type: str) -> "Ecosystem | None":
        """Map a purl type (e.g. 'pypi', 'golang') back to an ecosystem."""
        purl_type = purl_type.lower()
        for ecosystem in cls:
            if ecosystem.purl_type == purl_type:
                return ecosystem
        return None


_PURL_TYPES = {
    Ecosystem.PIP: "pypi",
    Ecosystem.GO: "golang",
    Ecosystem.SYSTEM: "generic",
}


def build_purl(ecosystem: Ecosystem, name: str, version: str = "") -> str:
    """Build a canonical Package URL string.

    Names containing a path (npm scopes, Go modules, composer vendors,
    docker repositories) keep everything before the last '/' as the purl
    namespace. Maven coordinates use the group as namespace.

    Args:
        ecosystem: Ecosystem of the package
        name: Package name as written in the source file
        version: Resolved version, empty when unknown

    Returns:
        purl string, e.g. 'pkg:npm/%40babel/core@7.23.0'
    """
    namespace = None
    if ecosystem is Ecosystem.MAVEN and ":" in name:
        namespace, name = name.split(":", 1)
    elif "/" in name:
        namespace, name = name.rsplit("/", 1)

    return PackageURL(
        type=ecosystem.purl_type,
        namespace=namespace or None,
        name=name,
        version=version or None,
    ).to_string()


def strip_version_prefix(version: str) -> str:
    """Strip range operators and a leading 'v' from a version string.

    Examples:
        '^1.2.3' -> '1.2.3', '>=2.0' -> '2.0', 'v1.9.0' -> '1.9.0'
    """
    cleaned = version.strip().lstrip("^~>=<!* ").strip()
    if len(cleaned) > 1 and cleaned[0] in "vV" and cleaned[1].isdigit():
        cleaned = cleaned[1:]
    return cleaned


@dataclass(frozen=True)
class ParsedDependency:
    """A single dependency extracted from a lockfile or manifest."""

    name: str
    version: str
    ecosystem: Ecosystem
    purl: str
    is_direct: bool

    @property
    def key(self) -> str:
        return f"{self.name}@{self.version}"


@dataclass
class LockfileParseResult:
    """Result of parsing one lockfile.

    An unknown filename or a file that fails to parse yields an empty
    result rather than an error; callers treat empty as "try the next file".
    """

    lockfile_type: str
    ecosystem: Ecosystem | None = None
    dependencies: list[ParsedDependency] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.dependencies

    def __len__(self) -> int:
        return len(self.dependencies)


class DependencyCollector:
    """Accumulates parsed dependencies, dropping duplicates.

    Duplicates are detected on name@version unless the caller supplies
    its own key (the Dockerfile parser dedups system packages by name).
    """

    def __init__(self, ecosystem: Ecosystem) -> None:
        self.ecosystem = ecosystem
        self._seen: set[str] = set()
        self._items: list[ParsedDependency] = []

    def add(
        self,
        name: str,
        version: str,
        is_direct: bool,
        ecosystem: Ecosystem | None = None,
        key: str | None = None,
    ) -> bool:
        """Add a dependency. Returns False when it was skipped."""
        # lockfiles occasionally carry numeric versions
        if isinstance(version, (int, float)):
            version = str(version)
        if not isinstance(name, str) or not isinstance(version, str):
            return False
        name = name.strip()
        version = version.strip()
        if not name:
            return False

        dedup_key = key or f"{name}@{version}"
        if dedup_key in self._seen:
            return False

        eco = ecosystem or self.ecosystem
        self._seen.add(dedup_key)
        self._items.append(
            ParsedDependency(
                name=name,
                version=version,
                ecosystem=eco,
                purl=build_purl(eco, name, version),
                is_direct=is_direct,
            )
        )
        return True

    def __contains__(self, key: str) -> bool:
        return key in self._seen

    @property
    def dependencies(self) -> list[ParsedDependency]:
        return list(self._items)
