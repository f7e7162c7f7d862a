"""Service for fetching the metadata of a single pull request."""

from collections.abc import Awaitable
from logging import getLogger
from typing import Any, TypeVar

import httpx

from .client import GitHubAPIClient
from .models import Commit, PullRequest, PullRequestMetadata, Review

logger = getLogger(__name__)

T = TypeVar("T")


async def _fetch_or_default(description: str, request: Awaitable[T], default: T) -> T:
    """Await an API request, degrading to a default value on transport errors.

    HTTP and network failures are logged and turned into "no data" so the message
    can still be produced with the affected sections left out.
    """
    try:
        return await request
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            logger.warning(f"{description} not found (404). Returning empty data.")
        else:
            logger.error(f"HTTP error {e.response.status_code} fetching {description}: {e}. Returning empty data.")
        return default
    except httpx.HTTPError as e:
        logger.error(f"Transport error fetching {description}: {e}. Returning empty data.")
        return default
    except ValueError as e:
        # A 2xx response whose body is not JSON, e.g. a proxy error page
        logger.error(f"Invalid JSON in response for {description}: {e}. Returning empty data.")
        return default


class PullRequestFetcher:
    """Fetches pull request details, reviews and commits, strictly one request after another."""

    def __init__(self, github_client: GitHubAPIClient, owner: str, repo: str) -> None:
        """Initialize the fetcher.

        Args:
            github_client: GitHub API client (inside its async context)
            owner: Repository owner
            repo: Repository name
        """
        self.github_client = github_client
        self.owner = owner
        self.repo = repo

    async def fetch(self, number: int) -> PullRequestMetadata:
        """Fetch all metadata needed to build the commit message for a pull request.

        Args:
            number: Pull request number

        Returns:
            PullRequestMetadata; sections that could not be fetched are empty
        """
        slug = f"{self.owner}/{self.repo}#{number}"
        logger.info(f"Fetching metadata for {slug}")

        details: dict[str, Any] = await _fetch_or_default(
            f"pull request {slug}",
            self.github_client.get_pull_request(self.owner, self.repo, number),
            {},
        )
        reviews: list[dict[str, Any]] = await _fetch_or_default(
            f"reviews for {slug}",
            self.github_client.get_pull_request_reviews(self.owner, self.repo, number),
            [],
        )
        commits: list[dict[str, Any]] = await _fetch_or_default(
            f"commits for {slug}",
            self.github_client.get_pull_request_commits(self.owner, self.repo, number),
            [],
        )

        pull_request = PullRequest.from_api(details if isinstance(details, dict) else {})
        logger.debug(f"Fetched {slug}: {len(reviews)} reviews, {len(commits)} commits")

        return PullRequestMetadata(
            pull_request=pull_request,
            reviews=[Review.from_api(review) for review in reviews if isinstance(review, dict)],
            commits=[Commit.from_api(commit) for commit in commits if isinstance(commit, dict)],
        )
