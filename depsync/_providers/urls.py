"""Repository URL parsing and provider detection."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

KNOWN_HOSTS = {
    "github.com": "github",
    "codeberg.org": "codeberg",
}


@dataclass(frozen=True)
class RepoRef:
    """A repository on a hosting provider."""

    provider: str
    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def _parse(url: str):
    url = url.strip()
    if not url:
        return None
    if "://" not in url:
        url = f"https://{url}"
    try:
        return urlparse(url)
    except ValueError:
        return None


def detect_provider(url: str) -> Optional[str]:
    """Detect the provider name from a repository URL hostname."""
    parsed = _parse(url or "")
    if parsed is None or not parsed.hostname:
        return None
    return KNOWN_HOSTS.get(parsed.hostname.lower())


def parse_repo_url(url: str, provider: Optional[str] = None) -> Optional[RepoRef]:
    """
    Parse owner and repository name from a repository URL.

    Accepts https://github.com/owner/repo, trailing slashes, a .git suffix
    and scheme-less URLs. When provider is given (self-hosted Gitea), the
    hostname is not checked.

    Returns:
        RepoRef, or None if the URL is not a recognisable repository URL.
    """
    parsed = _parse(url or "")
    if parsed is None:
        return None

    provider = provider or detect_provider(url)
    if provider is None:
        return None

    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) < 2:
        return None

    repo = parts[1].removesuffix(".git")
    if not repo:
        return None
    return RepoRef(provider=provider, owner=parts[0], repo=repo)
