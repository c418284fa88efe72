"""Tests for hosting provider adapters and repository URL parsing."""

from unittest.mock import Mock

import pytest
import requests

from depsync._providers import GiteaProvider, GitHubProvider, create_provider, detect_provider, parse_repo_url
from depsync.exceptions import ProviderError, UnsupportedRepositoryError


def make_response(status_code=200, json_data=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.text = text
    return response


class TestRepoUrls:
    """Tests for detect_provider and parse_repo_url."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/psf/requests",
            "https://github.com/psf/requests/",
            "https://github.com/psf/requests.git",
            "github.com/psf/requests",
            "https://github.com/psf/requests/tree/main/src",
        ],
    )
    def test_github_url_variants(self, url):
        """Test that common GitHub URL spellings resolve to the same repository."""
        ref = parse_repo_url(url)
        assert ref.provider == "github"
        assert ref.full_name == "psf/requests"

    def test_codeberg(self):
        """Test Codeberg detection."""
        assert detect_provider("https://codeberg.org/forgejo/forgejo") == "codeberg"
        assert parse_repo_url("https://codeberg.org/forgejo/forgejo").repo == "forgejo"

    def test_unknown_host(self):
        """Test that an unknown host is not parsed without an explicit provider."""
        assert detect_provider("https://git.example.com/team/app") is None
        assert parse_repo_url("https://git.example.com/team/app") is None

    def test_explicit_provider_for_self_hosted(self):
        """Test that a self-hosted URL parses when the provider is given."""
        ref = parse_repo_url("https://git.example.com/team/app", provider="gitea")
        assert ref.provider == "gitea"
        assert ref.full_name == "team/app"

    @pytest.mark.parametrize("url", ["", "https://github.com/", "https://github.com/psf"])
    def test_incomplete_urls(self, url):
        """Test that URLs without owner and repo are rejected."""
        assert parse_repo_url(url) is None


class TestCreateProvider:
    """Tests for the provider factory."""

    def test_github(self):
        """Test GitHub provider creation."""
        provider = create_provider("github", token="ghp_test")
        assert isinstance(provider, GitHubProvider)
        assert provider.session.headers["Authorization"] == "Bearer ghp_test"

    def test_codeberg_defaults_instance(self):
        """Test that Codeberg uses the public instance and token auth scheme."""
        provider = create_provider("codeberg", token="abc")
        assert provider.name == "codeberg"
        assert provider.api_base == "https://codeberg.org/api/v1"
        assert provider.session.headers["Authorization"] == "token abc"

    def test_self_hosted_requires_instance(self):
        """Test that gitea without an instance URL is rejected."""
        with pytest.raises(UnsupportedRepositoryError):
            create_provider("gitea")
        provider = create_provider("forgejo", instance_url="https://git.example.com/")
        assert provider.api_base == "https://git.example.com/api/v1"

    def test_unknown_provider(self):
        """Test that an unknown provider name raises."""
        with pytest.raises(UnsupportedRepositoryError):
            create_provider("gitlab")


class TestGitHubProvider:
    """Tests for GitHubProvider with a mocked session."""

    def setup_method(self):
        self.session = Mock(spec=requests.Session)
        self.provider = GitHubProvider(session=self.session, max_repo_files=3)

    def test_get_sbom_unwraps_envelope(self):
        """Test that the {"sbom": {...}} wrapper is removed."""
        self.session.get.return_value = make_response(json_data={"sbom": {"spdxVersion": "SPDX-2.3"}})
        assert self.provider.get_sbom("psf", "requests") == {"spdxVersion": "SPDX-2.3"}
        url = self.session.get.call_args[0][0]
        assert url == "https://api.github.com/repos/psf/requests/dependency-graph/sbom"

    @pytest.mark.parametrize("status", [403, 404])
    def test_get_sbom_unavailable(self, status):
        """Test that a disabled or forbidden dependency graph means no SBOM."""
        self.session.get.return_value = make_response(status_code=status, text="nope")
        assert self.provider.get_sbom("psf", "requests") is None

    def test_get_sbom_server_error_raises(self):
        """Test that other API errors propagate."""
        self.session.get.return_value = make_response(status_code=500, text="boom")
        with pytest.raises(ProviderError) as exc_info:
            self.provider.get_sbom("psf", "requests")
        assert exc_info.value.status_code == 500

    def test_timeout_raises_provider_error(self):
        """Test that network timeouts become ProviderError."""
        self.session.get.side_effect = requests.exceptions.Timeout()
        with pytest.raises(ProviderError, match="Timeout"):
            self.provider.get_repo("psf", "requests")

    def test_file_content_missing(self):
        """Test that a missing file is None, not an error."""
        self.session.get.return_value = make_response(status_code=404)
        assert self.provider.get_file_content("psf", "requests", "main", "Cargo.lock") is None

    def test_file_content_raw(self):
        """Test that file content is requested in raw form at the branch."""
        self.session.get.return_value = make_response(text="requests==2.31.0\n")
        content = self.provider.get_file_content("psf", "requests", "main", "requirements.txt")
        assert content == "requests==2.31.0\n"
        kwargs = self.session.get.call_args[1]
        assert kwargs["params"] == {"ref": "main"}
        assert kwargs["headers"]["Accept"] == "application/vnd.github.raw+json"

    def test_list_repo_files_blobs_only_and_capped(self):
        """Test that directories are dropped and the listing is capped."""
        tree = [
            {"path": "src", "type": "tree"},
            {"path": "src/a.py", "type": "blob"},
            {"path": "src/b.py", "type": "blob"},
            {"path": "src/c.py", "type": "blob"},
            {"path": "src/d.py", "type": "blob"},
        ]
        self.session.get.return_value = make_response(json_data={"tree": tree, "truncated": False})
        assert self.provider.list_repo_files("psf", "requests", "main") == ["src/a.py", "src/b.py", "src/c.py"]


class TestGiteaProvider:
    """Tests for GiteaProvider with a mocked session."""

    def setup_method(self):
        self.session = Mock(spec=requests.Session)
        self.provider = GiteaProvider(session=self.session)

    def test_no_api_sbom(self):
        """Test that Gitea forges never provide an SBOM."""
        assert self.provider.supports_api_sbom is False
        assert self.provider.get_sbom("forgejo", "forgejo") is None
        self.session.get.assert_not_called()

    def test_contributors_404_is_empty(self):
        """Test that a missing contributors endpoint is tolerated."""
        self.session.get.return_value = make_response(status_code=404)
        assert self.provider.get_contributors("forgejo", "forgejo") == []

    def test_raw_file_url(self):
        """Test the raw file endpoint."""
        self.session.get.return_value = make_response(text="content")
        assert self.provider.get_file_content("forgejo", "forgejo", "main", "go.mod") == "content"
        assert self.session.get.call_args[0][0] == "https://codeberg.org/api/v1/repos/forgejo/forgejo/raw/go.mod"
