"""Protocol definition for source hosting providers."""

from typing import Any, Optional, Protocol


class RepoProvider(Protocol):
    """Protocol for source hosting adapters (GitHub, Codeberg, Gitea).

    Metadata calls raise ProviderError on failure. File access is
    tolerant: a missing file is None, not an error.
    """

    @property
    def name(self) -> str:
        """Provider identifier, e.g. "github", "codeberg"."""
        ...

    @property
    def supports_api_sbom(self) -> bool:
        """Whether the provider can export a dependency-graph SBOM."""
        ...

    def get_repo(self, owner: str, repo: str) -> dict[str, Any]:
        ...

    def get_contributors(self, owner: str, repo: str) -> list[dict[str, Any]]:
        ...

    def get_languages(self, owner: str, repo: str) -> dict[str, int]:
        ...

    def get_sbom(self, owner: str, repo: str) -> Optional[dict[str, Any]]:
        """Return the provider-generated SPDX document, or None if unavailable."""
        ...

    def get_releases(self, owner: str, repo: str) -> list[dict[str, Any]]:
        ...

    def get_tags(self, owner: str, repo: str) -> list[dict[str, Any]]:
        ...

    def get_file_content(self, owner: str, repo: str, branch: str, path: str) -> Optional[str]:
        """Fetch a raw file from the repository. None when the file does not exist."""
        ...

    def list_repo_files(self, owner: str, repo: str, branch: str) -> list[str]:
        """List blob paths in the repository tree, capped at the configured maximum."""
        ...
