"""Assembles the squash commit message for a pull request."""

from dataclasses import dataclass, field
from logging import getLogger

from .contributors import ContributorAggregator, Contributors
from .github.models import PullRequestMetadata
from .issues import IssueClassification, IssueReference, classify_issues
from .mailmap import IdentityResolver

logger = getLogger(__name__)


@dataclass
class CommitMessageDraft:
    """A commit message kept as an ordered list of lines until it is rendered."""

    subject: str
    body_lines: list[str] = field(default_factory=list)

    def render(self) -> str:
        """Join subject and body into the final message, ending with a single newline."""
        lines = [self.subject]
        if self.body_lines:
            lines.append("")
            lines.extend(self.body_lines)
        return "\n".join(lines) + "\n"


def build_commit_message(
    title: str,
    pr_url: str,
    issues: list[IssueReference],
    contributors: Contributors,
    owner: str,
    repo: str,
) -> CommitMessageDraft:
    """Lay out the message: PR-URL and issue lines, then the trailer groups.

    Issue lines are ordered Closes before Ref. The trailer block (Co-authored-by,
    Reviewed-by, Signed-off-by) always follows one blank line after the issue block;
    empty groups are left out.

    Args:
        title: Pull request title, used as the subject
        pr_url: Pull request URL
        issues: Classified issue references
        contributors: Resolved trailer groups
        owner: Repository owner, for issue URLs
        repo: Repository name, for issue URLs

    Returns:
        CommitMessageDraft
    """
    body_lines = [f"PR-URL: {pr_url}"]
    body_lines.extend(
        ref.render(owner, repo) for ref in issues if ref.classification is IssueClassification.CLOSES
    )
    body_lines.extend(
        ref.render(owner, repo) for ref in issues if ref.classification is IssueClassification.REFERENCES
    )

    body_lines.append("")
    body_lines.extend(f"Co-authored-by: {identity}" for identity in contributors.co_authors)
    body_lines.extend(f"Reviewed-by: {identity}" for identity in contributors.reviewers)
    body_lines.extend(f"Signed-off-by: {value}" for value in contributors.sign_offs)

    return CommitMessageDraft(subject=title.strip(), body_lines=body_lines)


def generate_commit_message(
    metadata: PullRequestMetadata,
    resolver: IdentityResolver,
    owner: str,
    repo: str,
) -> str:
    """Turn fetched pull request metadata into the final commit message text.

    Args:
        metadata: Pull request details, reviews and commits
        resolver: Identity resolver backed by the repository's alias file
        owner: Repository owner
        repo: Repository name

    Returns:
        The rendered commit message
    """
    pull_request = metadata.pull_request
    aggregator = ContributorAggregator.for_author_handle(resolver, pull_request.author_handle)
    contributors = aggregator.aggregate(metadata.commits, metadata.reviews)
    issues = classify_issues(pull_request.body)

    draft = build_commit_message(
        title=pull_request.title,
        pr_url=pull_request.html_url,
        issues=issues,
        contributors=contributors,
        owner=owner,
        repo=repo,
    )
    logger.info(f"Generated commit message for #{pull_request.number} with {len(draft.body_lines)} body lines")
    return draft.render()
