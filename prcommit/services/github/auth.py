"""GitHub authentication and client factory."""

from logging import getLogger

from pydantic import SecretStr

from prcommit.conf.github import GitHubSettings

from .client import GitHubAPIClient

logger = getLogger(__name__)


class GitHubClient:
    """Factory for creating GitHub API clients."""

    def __init__(self, settings: GitHubSettings | None = None, token_override: str | None = None) -> None:
        """Initialize with settings.

        Args:
            settings: GitHub settings (defaults to global settings)
            token_override: Optional PAT token to override settings
        """
        if settings is None:
            from prcommit.settings import settings as global_settings

            settings = global_settings

        self.settings = settings
        self.token_override = token_override

    def get_client(self) -> GitHubAPIClient:
        """Return a GitHub API client.

        Uses the token override if given, then the configured PAT. Without either,
        the client makes unauthenticated requests, which GitHub rate limits heavily.

        Returns:
            GitHub API client
        """
        token: SecretStr | None
        if self.token_override:
            logger.info("Using token override for authentication")
            token = SecretStr(self.token_override)
        elif self.settings.github_token:
            logger.info("Using PAT for authentication")
            token = self.settings.github_token
        else:
            logger.warning("No GitHub token configured; making unauthenticated requests")
            token = None

        return GitHubAPIClient(
            token,
            base_url=self.settings.github_api_url,
            max_retries=self.settings.github_max_retries,
        )
