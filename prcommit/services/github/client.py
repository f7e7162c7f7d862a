"""Async GitHub API client using httpx."""

import asyncio
import time
from logging import getLogger
from typing import Any

import httpx
from pydantic import SecretStr

logger = getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST")


class GitHubAPIClient:
    """Async GitHub API client for making API requests."""

    def __init__(
        self,
        token: SecretStr | None = None,
        base_url: str = "https://api.github.com",
        max_retries: int = 0,
    ) -> None:
        """Initialize GitHub API client.

        Args:
            token: GitHub Personal Access Token (None for unauthenticated requests)
            base_url: Base URL for GitHub API (default: https://api.github.com)
            max_retries: Retries on timeouts and rate limiting (default: 0, no retries)
        """
        self.token = token.get_secret_value() if token is not None else None
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self._client: httpx.AsyncClient | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    async def __aenter__(self) -> "GitHubAPIClient":
        """Enter async context manager."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(30.0, connect=10.0),
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        if self._client:
            await self._client.aclose()

    async def _request_with_retry(
        self,
        method: str,
        url: str,
        retry_count: int = 0,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make HTTP request, retrying on timeout and rate limiting up to max_retries times.

        Args:
            method: HTTP method (GET, POST)
            url: URL to request
            retry_count: Current retry attempt (internal use)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            httpx.Response object

        Raises:
            httpx.HTTPStatusError: If the request fails after retries
            httpx.TimeoutException: If request times out after retries
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use async with context manager")

        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response

        except httpx.TimeoutException:
            if retry_count < self.max_retries:
                wait_time = 2**retry_count
                logger.warning(
                    f"Timeout on {method} {url} (attempt {retry_count + 1}/{self.max_retries}). "
                    f"Waiting {wait_time} seconds before retry..."
                )
                await asyncio.sleep(wait_time)
                return await self._request_with_retry(method, url, retry_count + 1, **kwargs)
            logger.error(f"{method} {url} failed due to timeout")
            raise

        except httpx.HTTPStatusError as e:
            # Handle rate limiting (403 or 429)
            if e.response.status_code in (403, 429) and retry_count < self.max_retries:
                reset_time = e.response.headers.get("X-RateLimit-Reset")
                remaining = e.response.headers.get("X-RateLimit-Remaining", "")
                is_rate_limit = e.response.status_code == 429 or remaining == "0"

                if is_rate_limit:
                    if reset_time:
                        wait_time = min(int(reset_time) - int(time.time()), 60)
                        wait_time = max(wait_time, 1)
                    else:
                        wait_time = 2**retry_count

                    logger.warning(
                        f"Rate limit hit on {method} {url} (attempt {retry_count + 1}/{self.max_retries}). "
                        f"Waiting {wait_time} seconds before retry..."
                    )
                    await asyncio.sleep(wait_time)
                    return await self._request_with_retry(method, url, retry_count + 1, **kwargs)
            raise

    async def request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Issue a request against an API endpoint and return the decoded JSON body.

        Args:
            method: HTTP method, GET or POST
            endpoint: Path relative to the API base URL (e.g. "/repos/owner/repo/pulls/1")
            **kwargs: Additional arguments to pass to httpx request (params, json, ...)

        Returns:
            Decoded JSON response

        Raises:
            ValueError: If the method is not supported or the endpoint is empty
            httpx.HTTPStatusError: If the request fails
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}. Supported methods: {', '.join(SUPPORTED_METHODS)}")
        if not endpoint:
            raise ValueError("An API endpoint is required")
        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"

        response = await self._request_with_retry(method, f"{self.base_url}{endpoint}", **kwargs)
        return response.json()

    async def _get_all_pages(self, endpoint: str, per_page: int = 100) -> list[dict[str, Any]]:
        """Fetch every page of a list endpoint, one page at a time."""
        page = 1
        items: list[dict[str, Any]] = []

        while True:
            result: list[dict[str, Any]] = await self.request(
                "GET",
                endpoint,
                params={"per_page": per_page, "page": page},
            )

            if not result:
                break

            items.extend(result)

            if len(result) < per_page:
                break

            page += 1

        return items

    async def get_pull_request(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        """Get a pull request's details.

        Args:
            owner: Repository owner (user or organization)
            repo: Repository name
            number: Pull request number

        Returns:
            Pull request data dictionary including title, body, html_url and user

        Raises:
            httpx.HTTPStatusError: If the request fails
        """
        result: dict[str, Any] = await self.request("GET", f"/repos/{owner}/{repo}/pulls/{number}")
        return result

    async def get_pull_request_reviews(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
        """Get all reviews submitted on a pull request.

        Raises:
            httpx.HTTPStatusError: If the request fails
        """
        return await self._get_all_pages(f"/repos/{owner}/{repo}/pulls/{number}/reviews")

    async def get_pull_request_commits(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
        """Get the commits of a pull request (GitHub caps this list at 250 commits).

        Raises:
            httpx.HTTPStatusError: If the request fails
        """
        return await self._get_all_pages(f"/repos/{owner}/{repo}/pulls/{number}/commits")
