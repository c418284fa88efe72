"""GitHub REST API provider."""

import json
from typing import Any, Optional

import requests

from ..config import DEFAULT_MAX_REPO_FILES, DEFAULT_REQUEST_TIMEOUT
from ..exceptions import ProviderError
from ..http_client import create_session
from ..logging_config import logger

GITHUB_API_BASE = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"


class GitHubProvider:
    """
    Provider for repositories hosted on github.com.

    GitHub is the only provider with a dependency-graph SBOM export
    (GET /repos/{owner}/{repo}/dependency-graph/sbom), which makes it
    the only provider that can satisfy the API acquisition tier.
    """

    name = "github"
    supports_api_sbom = True

    def __init__(
        self,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        api_base: str = GITHUB_API_BASE,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        max_repo_files: int = DEFAULT_MAX_REPO_FILES,
    ):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.max_repo_files = max_repo_files
        if session is None:
            session = create_session(token=token, accept="application/vnd.github+json")
            session.headers["X-GitHub-Api-Version"] = GITHUB_API_VERSION
        self.session = session

    def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        url = f"{self.api_base}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise ProviderError(f"Timeout calling GitHub API: {path}")
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"Error calling GitHub API {path}: {e}")

        if response.status_code != 200:
            raise ProviderError(
                f"GitHub API error {response.status_code} for {path}: {response.text[:200]}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise ProviderError(f"Invalid JSON from GitHub API {path}: {e}")

    def get_repo(self, owner: str, repo: str) -> dict[str, Any]:
        return self._get_json(f"/repos/{owner}/{repo}")

    def get_contributors(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return self._get_json(f"/repos/{owner}/{repo}/contributors", params={"per_page": 100})

    def get_languages(self, owner: str, repo: str) -> dict[str, int]:
        return self._get_json(f"/repos/{owner}/{repo}/languages")

    def get_releases(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return self._get_json(f"/repos/{owner}/{repo}/releases", params={"per_page": 100})

    def get_tags(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return self._get_json(f"/repos/{owner}/{repo}/tags", params={"per_page": 100})

    def get_sbom(self, owner: str, repo: str) -> Optional[dict[str, Any]]:
        """
        Fetch the dependency-graph SBOM.

        The dependency graph may be disabled for the repository (404) or
        the token may lack access to it (403); both mean "no API SBOM"
        rather than a failure.
        """
        try:
            data = self._get_json(f"/repos/{owner}/{repo}/dependency-graph/sbom")
        except ProviderError as e:
            if e.status_code in (403, 404):
                logger.info(f"Dependency graph SBOM not available for {owner}/{repo} (HTTP {e.status_code})")
                return None
            raise
        if isinstance(data, dict) and isinstance(data.get("sbom"), dict):
            return data["sbom"]
        return data

    def get_file_content(self, owner: str, repo: str, branch: str, path: str) -> Optional[str]:
        url = f"{self.api_base}/repos/{owner}/{repo}/contents/{path}"
        response = self.session.get(
            url,
            params={"ref": branch},
            headers={"Accept": "application/vnd.github.raw+json"},
            timeout=self.timeout,
        )
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise ProviderError(
                f"GitHub API error {response.status_code} fetching {path}",
                status_code=response.status_code,
            )
        return response.text

    def list_repo_files(self, owner: str, repo: str, branch: str) -> list[str]:
        data = self._get_json(f"/repos/{owner}/{repo}/git/trees/{branch}", params={"recursive": 1})
        if data.get("truncated"):
            logger.info(f"GitHub tree listing truncated for {owner}/{repo}")
        paths = [entry["path"] for entry in data.get("tree", []) if entry.get("type") == "blob"]
        return paths[: self.max_repo_files]
