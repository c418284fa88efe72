"""Source hosting provider adapters.

Example usage:
    from depsync._providers import create_provider, parse_repo_url

    ref = parse_repo_url("https://github.com/psf/requests")
    provider = create_provider(ref.provider, token="ghp_...")
    files = provider.list_repo_files(ref.owner, ref.repo, "main")
"""

from typing import Optional

from ..config import DEFAULT_MAX_REPO_FILES, DEFAULT_REQUEST_TIMEOUT
from ..exceptions import UnsupportedRepositoryError
from .gitea import CODEBERG_URL, GiteaProvider
from .github import GitHubProvider
from .protocol import RepoProvider
from .urls import RepoRef, detect_provider, parse_repo_url


def create_provider(
    kind: str,
    token: Optional[str] = None,
    instance_url: Optional[str] = None,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
    max_repo_files: int = DEFAULT_MAX_REPO_FILES,
) -> RepoProvider:
    """
    Build a provider adapter by name.

    Args:
        kind: "github", "codeberg", "gitea" or "forgejo"
        token: Optional access token
        instance_url: Base URL of a self-hosted Gitea/Forgejo instance

    Raises:
        UnsupportedRepositoryError: If the provider is unknown, or a
            self-hosted provider is requested without an instance URL.
    """
    if kind == "github":
        return GitHubProvider(token=token, timeout=timeout, max_repo_files=max_repo_files)
    if kind == "codeberg":
        return GiteaProvider(
            token=token,
            instance_url=instance_url or CODEBERG_URL,
            name="codeberg",
            timeout=timeout,
            max_repo_files=max_repo_files,
        )
    if kind in ("gitea", "forgejo"):
        if not instance_url:
            raise UnsupportedRepositoryError(f"{kind} requires an instance URL")
        return GiteaProvider(
            token=token,
            instance_url=instance_url,
            name=kind,
            timeout=timeout,
            max_repo_files=max_repo_files,
        )
    raise UnsupportedRepositoryError(f"Unsupported repository provider: {kind}")


__all__ = [
    "create_provider",
    "detect_provider",
    "parse_repo_url",
    "RepoRef",
    "RepoProvider",
    "GitHubProvider",
    "GiteaProvider",
]
