from pathlib import Path

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .github import GitHubSettings


class Settings(GitHubSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    project_name: str = "prcommit"
    debug: bool = False

    repo_root: Path = Field(
        default=Path("."),
        description="Root of the repository checkout containing the alias file",
    )
    mailmap_path: Path | None = Field(
        default=None,
        description="Alias (mailmap) file; defaults to <repo_root>/.mailmap",
    )

    def get_mailmap_path(self) -> Path:
        """Return the alias file location, resolving the default against repo_root."""
        if self.mailmap_path is None:
            return self.repo_root / ".mailmap"
        if self.mailmap_path.is_absolute():
            return self.mailmap_path
        return self.repo_root / self.mailmap_path
