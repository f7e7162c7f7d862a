import re

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

# GitHub owner and repository names: alphanumerics plus '-', '_' and '.'
_SLUG_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class GitHubSettings(BaseSettings):
    """GitHub API configuration and authentication settings."""

    # Personal Access Token authentication (unauthenticated requests are made when unset)
    github_token: SecretStr | None = Field(
        default=None,
        description="GitHub Personal Access Token for API authentication",
    )

    github_api_url: str = Field(
        default="https://api.github.com",
        description="Base URL for the GitHub REST API",
    )

    # Repository whose pull requests are processed
    github_owner: str = Field(
        default="stdlib-js",
        description="Owner (user or organization) of the repository",
    )
    github_repo: str = Field(
        default="stdlib",
        description="Name of the repository",
    )

    github_noreply_host: str = Field(
        default="github.com",
        description="Host used for placeholder noreply addresses (<handle>@users.noreply.<host>)",
    )

    github_max_retries: int = Field(
        default=0,
        description="Number of retries on timeouts and rate limiting (0 disables retrying)",
    )

    @field_validator("github_owner", "github_repo")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        """Validate owner and repository names."""
        if not _SLUG_PATTERN.match(v):
            raise ValueError(f"Invalid GitHub owner/repository name: {v!r}")
        return v

    @field_validator("github_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the API base URL so endpoints can be appended directly."""
        return v.rstrip("/")

    @field_validator("github_max_retries")
    @classmethod
    def validate_retries(cls, v: int) -> int:
        """Validate retry count is not negative."""
        if v < 0:
            raise ValueError("github_max_retries must not be negative")
        return v
