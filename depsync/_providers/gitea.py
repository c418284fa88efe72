"""Gitea/Forgejo REST API provider (Codeberg and self-hosted instances)."""

import json
from typing import Any, Optional
from urllib.parse import quote

import requests

from ..config import DEFAULT_MAX_REPO_FILES, DEFAULT_REQUEST_TIMEOUT
from ..exceptions import ProviderError
from ..http_client import create_session
from ..logging_config import logger

CODEBERG_URL = "https://codeberg.org"


class GiteaProvider:
    """
    Provider for Gitea-compatible forges.

    Codeberg runs Forgejo, which shares the Gitea v1 API; self-hosted
    Gitea and Forgejo instances are reached by passing instance_url.
    These forges have no SBOM export, so acquisition always falls through
    to the lockfile or import-scan tiers.
    """

    supports_api_sbom = False

    def __init__(
        self,
        token: Optional[str] = None,
        instance_url: str = CODEBERG_URL,
        name: str = "codeberg",
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        max_repo_files: int = DEFAULT_MAX_REPO_FILES,
    ):
        self.name = name
        self.api_base = f"{instance_url.rstrip('/')}/api/v1"
        self.timeout = timeout
        self.max_repo_files = max_repo_files
        if session is None:
            session = create_session(accept="application/json")
            if token:
                # Gitea expects the "token" scheme rather than "Bearer"
                session.headers["Authorization"] = f"token {token}"
        self.session = session

    def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        url = f"{self.api_base}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise ProviderError(f"Timeout calling {self.name} API: {path}")
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"Error calling {self.name} API {path}: {e}")

        if response.status_code != 200:
            raise ProviderError(
                f"{self.name} API error {response.status_code} for {path}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise ProviderError(f"Invalid JSON from {self.name} API {path}: {e}")

    def get_repo(self, owner: str, repo: str) -> dict[str, Any]:
        return self._get_json(f"/repos/{owner}/{repo}")

    def get_contributors(self, owner: str, repo: str) -> list[dict[str, Any]]:
        # Not every Forgejo release exposes this endpoint
        try:
            return self._get_json(f"/repos/{owner}/{repo}/contributors")
        except ProviderError as e:
            if e.status_code == 404:
                return []
            raise

    def get_languages(self, owner: str, repo: str) -> dict[str, int]:
        return self._get_json(f"/repos/{owner}/{repo}/languages")

    def get_releases(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return self._get_json(f"/repos/{owner}/{repo}/releases", params={"limit": 50})

    def get_tags(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return self._get_json(f"/repos/{owner}/{repo}/tags", params={"limit": 50})

    def get_sbom(self, owner: str, repo: str) -> Optional[dict[str, Any]]:
        return None

    def get_file_content(self, owner: str, repo: str, branch: str, path: str) -> Optional[str]:
        url = f"{self.api_base}/repos/{owner}/{repo}/raw/{quote(path)}"
        response = self.session.get(url, params={"ref": branch}, timeout=self.timeout)
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise ProviderError(
                f"{self.name} API error {response.status_code} fetching {path}",
                status_code=response.status_code,
            )
        return response.text

    def list_repo_files(self, owner: str, repo: str, branch: str) -> list[str]:
        data = self._get_json(
            f"/repos/{owner}/{repo}/git/trees/{branch}",
            params={"recursive": "true", "per_page": 0},
        )
        if data.get("truncated"):
            logger.info(f"{self.name} tree listing truncated for {owner}/{repo}")
        paths = [entry["path"] for entry in data.get("tree", []) if entry.get("type") == "blob"]
        return paths[: self.max_repo_files]
