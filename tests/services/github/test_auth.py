from pydantic import SecretStr

from prcommit.conf.github import GitHubSettings
from prcommit.services.github.auth import GitHubClient
from prcommit.services.github.client import GitHubAPIClient


def test_pat_client_creation() -> None:
    """Test creating a client with the configured PAT."""
    settings = GitHubSettings(github_token=SecretStr("test_pat_token"))

    client = GitHubClient(settings=settings).get_client()

    assert isinstance(client, GitHubAPIClient)
    assert client.token == "test_pat_token"
    assert client.is_authenticated


def test_token_override() -> None:
    """Test using token override instead of settings."""
    settings = GitHubSettings(github_token=SecretStr("test_pat_token"))

    client = GitHubClient(settings=settings, token_override="override_token").get_client()

    assert client.token == "override_token"


def test_unauthenticated_client() -> None:
    """Test a client without any token makes unauthenticated requests."""
    client = GitHubClient(settings=GitHubSettings(github_token=None)).get_client()

    assert client.token is None
    assert not client.is_authenticated


def test_client_uses_settings() -> None:
    """Test API URL and retry count come from settings."""
    settings = GitHubSettings(github_api_url="https://github.example.com/api/v3/", github_max_retries=2)

    client = GitHubClient(settings=settings).get_client()

    assert client.base_url == "https://github.example.com/api/v3"
    assert client.max_retries == 2


def test_default_settings() -> None:
    """Test the factory falls back to global settings."""
    from prcommit.settings import settings

    assert GitHubClient().settings is settings
