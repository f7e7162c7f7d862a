"""Collects the people credited in the commit message trailers."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from logging import getLogger

from .github.models import Commit, Review
from .mailmap import Identity, IdentityResolver

logger = getLogger(__name__)

CO_AUTHOR_PATTERN = re.compile(r"^[ \t]*co-authored-by:[ \t]*(?P<value>.*?)[ \t\r]*$", re.IGNORECASE | re.MULTILINE)
SIGN_OFF_PATTERN = re.compile(r"^[ \t]*signed-off-by:[ \t]*(?P<value>.*?)[ \t\r]*$", re.IGNORECASE | re.MULTILINE)


def extract_trailer_values(message: str, pattern: re.Pattern[str]) -> list[str]:
    """Return the non-empty values of every trailer line in message matching pattern."""
    return [match.group("value") for match in pattern.finditer(message) if match.group("value")]


@dataclass
class Contributors:
    """Resolved, deduplicated and sorted identities for each trailer group."""

    co_authors: list[str] = field(default_factory=list)
    reviewers: list[str] = field(default_factory=list)
    sign_offs: list[str] = field(default_factory=list)


class ContributorAggregator:
    """Builds the co-author, reviewer and sign-off groups for a pull request."""

    def __init__(self, resolver: IdentityResolver, pr_author: str) -> None:
        """Initialize the aggregator.

        Args:
            resolver: Identity resolver used for every name/email pair and handle
            pr_author: Resolved identity of the pull request author, excluded from every group
        """
        self.resolver = resolver
        self.pr_author = pr_author

    @classmethod
    def for_author_handle(cls, resolver: IdentityResolver, author_handle: str) -> "ContributorAggregator":
        return cls(resolver, resolver.resolve_handle(author_handle))

    def _finalize(self, identities: Iterable[str]) -> list[str]:
        """Drop empty entries and the PR author, then deduplicate and sort."""
        return sorted({identity for identity in identities if identity and identity != self.pr_author})

    def co_authors(self, commits: list[Commit]) -> list[str]:
        """Co-authors from ``Co-authored-by:`` trailers merged with the commit authors."""
        identities: list[str] = []

        for commit in commits:
            for value in extract_trailer_values(commit.message, CO_AUTHOR_PATTERN):
                identity = Identity.parse(value)
                if identity is None:
                    logger.debug(f"Ignoring malformed Co-authored-by trailer: {value!r}")
                    continue
                identities.append(self.resolver.resolve_name_email(identity.name, identity.email))

            if commit.author_name.strip():
                identities.append(self.resolver.resolve_name_email(commit.author_name, commit.author_email))

        return self._finalize(identities)

    def reviewers(self, reviews: list[Review]) -> list[str]:
        """Identities of everyone who approved the pull request."""
        return self._finalize(
            self.resolver.resolve_handle(review.reviewer_handle) for review in reviews if review.is_approval
        )

    def sign_offs(self, commits: list[Commit]) -> list[str]:
        """Raw ``Signed-off-by:`` values, deduplicated and sorted."""
        values = {value for commit in commits for value in extract_trailer_values(commit.message, SIGN_OFF_PATTERN)}
        return sorted(values)

    def aggregate(self, commits: list[Commit], reviews: list[Review]) -> Contributors:
        contributors = Contributors(
            co_authors=self.co_authors(commits),
            reviewers=self.reviewers(reviews),
            sign_offs=self.sign_offs(commits),
        )
        logger.debug(
            f"Aggregated {len(contributors.co_authors)} co-authors, {len(contributors.reviewers)} reviewers "
            f"and {len(contributors.sign_offs)} sign-offs"
        )
        return contributors
