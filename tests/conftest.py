import os

# Keep tests independent of any token or repository configured in the environment.
# This must happen before settings are loaded
for name in ("GITHUB_TOKEN", "GITHUB_OWNER", "GITHUB_REPO", "GITHUB_API_URL", "REPO_ROOT", "MAILMAP_PATH"):
    os.environ.pop(name, None)

from pathlib import Path

import pytest
from pydantic import SecretStr

from prcommit.services.github.client import GitHubAPIClient
from prcommit.services.github.models import Commit, PullRequest, PullRequestMetadata, Review
from prcommit.services.mailmap import AliasTable, IdentityResolver

MAILMAP = """\
# Canonical identities first, historical ones after
New Name <new@x.com> Old Name <old@x.com>
Octo Cat <octocat@example.com> <octocat@users.noreply.github.com>
Jane Doe <jane@example.com> jdoe-gh <jdoe-gh@users.noreply.github.com>
Pat Author <pat@example.com> Pat <pat@old.example.com>
"""


@pytest.fixture
def mock_client() -> GitHubAPIClient:
    """Create a test GitHub API client for mocking."""
    return GitHubAPIClient(token=SecretStr("test_token"))


@pytest.fixture
def mailmap_file(tmp_path: Path) -> Path:
    """Write a sample alias file at the root of a temporary checkout."""
    path = tmp_path / ".mailmap"
    path.write_text(MAILMAP, encoding="utf-8")
    return path


@pytest.fixture
def alias_table() -> AliasTable:
    return AliasTable.parse(MAILMAP)


@pytest.fixture
def resolver(alias_table: AliasTable) -> IdentityResolver:
    return IdentityResolver(alias_table)


@pytest.fixture
def sample_metadata() -> PullRequestMetadata:
    """Pull request metadata exercising every trailer group."""
    return PullRequestMetadata(
        pull_request=PullRequest(
            number=1234,
            title="feat: add `foo` package",
            body="This PR adds a package.\n\nFixes #42 and see #17.\nResolves: #99",
            html_url="https://github.com/stdlib-js/stdlib/pull/1234",
            author_handle="pat",
        ),
        reviews=[
            Review(reviewer_handle="jdoe-gh", state="APPROVED"),
            Review(reviewer_handle="someone", state="COMMENTED"),
            Review(reviewer_handle="jdoe-gh", state="APPROVED"),
        ],
        commits=[
            Commit(
                author_name="Pat",
                author_email="pat@old.example.com",
                message="feat: add package\n\nCo-authored-by: Old Name <old@x.com>\nSigned-off-by: Pat <pat@old.example.com>",
            ),
            Commit(
                author_name="Octo Cat",
                author_email="octocat@example.com",
                message="docs: update readme\n\nSigned-off-by: Pat <pat@old.example.com>",
            ),
        ],
    )
