from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PullRequest:
    """Domain model for the pull request being merged."""

    number: int
    title: str
    body: str
    html_url: str
    author_handle: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PullRequest":
        """Build from a `GET /repos/{owner}/{repo}/pulls/{number}` response.

        Missing or null fields become empty values rather than errors.
        """
        user = data.get("user") or {}
        return cls(
            number=int(data.get("number") or 0),
            title=data.get("title") or "",
            body=data.get("body") or "",
            html_url=data.get("html_url") or "",
            author_handle=user.get("login") or "",
        )


@dataclass(frozen=True)
class Review:
    """A single pull request review."""

    reviewer_handle: str
    state: str

    @property
    def is_approval(self) -> bool:
        return self.state == "APPROVED"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Review":
        user = data.get("user") or {}
        return cls(reviewer_handle=user.get("login") or "", state=data.get("state") or "")


@dataclass(frozen=True)
class Commit:
    """Author metadata and message of a commit in the pull request."""

    author_name: str
    author_email: str
    message: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Commit":
        commit = data.get("commit") or {}
        author = commit.get("author") or {}
        return cls(
            author_name=author.get("name") or "",
            author_email=author.get("email") or "",
            message=commit.get("message") or "",
        )


@dataclass
class PullRequestMetadata:
    """Everything fetched for one pull request."""

    pull_request: PullRequest
    reviews: list[Review] = field(default_factory=list)
    commits: list[Commit] = field(default_factory=list)
