"""Classifies the issues referenced in a pull request description."""

import re
from dataclasses import dataclass
from enum import Enum
from logging import getLogger

logger = getLogger(__name__)

ISSUE_REFERENCE_PATTERN = re.compile(r"#(\d+)")

CLOSING_KEYWORDS = ("close", "closes", "closed", "fix", "fixes", "fixed", "resolve", "resolves", "resolved")

# Keyword directly followed by a colon or whitespace, then the reference as a whole word
CLOSING_REFERENCE_PATTERN = re.compile(
    rf"\b(?:{'|'.join(CLOSING_KEYWORDS)})(?::|\s)\s*#(\d+)\b",
    re.IGNORECASE,
)

MAX_ISSUE_DIGITS = 20


class IssueClassification(str, Enum):
    """How the merged pull request relates to an issue."""

    CLOSES = "Closes"
    REFERENCES = "Ref"


@dataclass(frozen=True)
class IssueReference:
    number: int
    classification: IssueClassification

    def render(self, owner: str, repo: str) -> str:
        """Render as a ``Closes:`` or ``Ref:`` line pointing at the issue."""
        return f"{self.classification.value}: {issue_url(owner, repo, self.number)}"


def issue_url(owner: str, repo: str, number: int) -> str:
    return f"https://github.com/{owner}/{repo}/issues/{number}"


def _issue_number(digits: str) -> int | None:
    """Normalize leading zeros so "#042" and "#42" are the same issue; None for absurdly long numbers."""
    digits = digits.lstrip("0") or "0"
    if len(digits) > MAX_ISSUE_DIGITS:
        return None
    return int(digits)


def classify_issues(body: str) -> list[IssueReference]:
    """Find every ``#N`` reference in body and classify it.

    An issue is closed by the pull request when a closing keyword immediately
    precedes its reference anywhere in the body (``Fixes #42``, ``closes: #42``);
    every other referenced issue is only referenced. Issues are returned once each,
    in order of first appearance.

    Args:
        body: Pull request description

    Returns:
        List of IssueReference objects
    """
    closed = {_issue_number(match.group(1)) for match in CLOSING_REFERENCE_PATTERN.finditer(body)}

    references: list[IssueReference] = []
    seen: set[int] = set()

    for match in ISSUE_REFERENCE_PATTERN.finditer(body):
        number = _issue_number(match.group(1))
        if number is None:
            logger.debug(f"Ignoring issue reference with more than {MAX_ISSUE_DIGITS} digits")
            continue
        if number in seen:
            continue
        seen.add(number)

        if number in closed:
            classification = IssueClassification.CLOSES
        else:
            classification = IssueClassification.REFERENCES

        references.append(IssueReference(number=number, classification=classification))

    logger.debug(
        f"Classified {len(references)} issue references "
        f"({sum(ref.classification is IssueClassification.CLOSES for ref in references)} closing)"
    )
    return references
