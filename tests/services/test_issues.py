import pytest

from prcommit.services.issues import IssueClassification, IssueReference, classify_issues, issue_url

CLOSES = IssueClassification.CLOSES
REFERENCES = IssueClassification.REFERENCES


def _classes(body: str) -> dict[int, IssueClassification]:
    return {ref.number: ref.classification for ref in classify_issues(body)}


def test_fixes_and_references() -> None:
    """Test the closing keyword applies only to the adjacent reference."""
    assert classify_issues("Fixes #42 and see #17") == [
        IssueReference(number=42, classification=CLOSES),
        IssueReference(number=17, classification=REFERENCES),
    ]


@pytest.mark.parametrize(
    "keyword",
    ["close", "closes", "closed", "fix", "fixes", "fixed", "resolve", "resolves", "resolved"],
)
def test_every_closing_keyword(keyword: str) -> None:
    """Test each closing keyword and its inflections."""
    assert _classes(f"{keyword} #7") == {7: CLOSES}


@pytest.mark.parametrize(
    "body",
    ["FIXES #7", "Closes: #7", "closes:#7", "Resolves:   #7", "fixes\t#7", "Fixed\n#7", "(resolves #7)"],
)
def test_closing_keyword_variants(body: str) -> None:
    """Test case-insensitivity and colon/whitespace separators."""
    assert _classes(body) == {7: CLOSES}


@pytest.mark.parametrize(
    "body",
    [
        "see #7",
        "this closes issue #7",
        "fixes, #7",
        "hotfix #7",
        "prefixes #7",
        "#7",
    ],
)
def test_non_adjacent_keywords_reference(body: str) -> None:
    """Test that anything but a keyword directly before the reference is a plain reference."""
    assert _classes(body) == {7: REFERENCES}


def test_whole_number_match() -> None:
    """Test that a closing keyword for #420 does not close #42."""
    assert _classes("Fixes #420, related to #42") == {420: CLOSES, 42: REFERENCES}


def test_closing_anywhere_in_body_wins() -> None:
    """Test a reference is closing if any occurrence follows a closing keyword."""
    assert _classes("Related to #5.\n\nFixes #5") == {5: CLOSES}


def test_each_issue_classified_once_in_first_appearance_order() -> None:
    """Test deduplication and ordering of issue references."""
    refs = classify_issues("See #3, #1 and #3 again. Closes #1")
    assert [ref.number for ref in refs] == [3, 1]
    assert [ref.classification for ref in refs] == [REFERENCES, CLOSES]


def test_leading_zeros_normalized() -> None:
    """Test #042 and #42 refer to the same issue."""
    assert classify_issues("Fixes #042, see #42") == [IssueReference(number=42, classification=CLOSES)]


def test_partition_property() -> None:
    """Test every referenced number appears in exactly one classification."""
    body = "Fixes #1, resolves #2. Ref #3, #4; closes: #4\n#5 #1 #2"
    refs = classify_issues(body)
    numbers = [ref.number for ref in refs]

    assert sorted(numbers) == [1, 2, 3, 4, 5]
    assert len(numbers) == len(set(numbers))
    closing = {ref.number for ref in refs if ref.classification is CLOSES}
    referencing = {ref.number for ref in refs if ref.classification is REFERENCES}
    assert closing == {1, 2, 4}
    assert referencing == {3, 5}
    assert closing.isdisjoint(referencing)


def test_no_references() -> None:
    """Test bodies without issue references."""
    assert classify_issues("") == []
    assert classify_issues("No issues here, just C# code and # headings") == []


def test_render() -> None:
    """Test rendering Closes and Ref lines."""
    assert IssueReference(42, CLOSES).render("stdlib-js", "stdlib") == (
        "Closes: https://github.com/stdlib-js/stdlib/issues/42"
    )
    assert IssueReference(17, REFERENCES).render("stdlib-js", "stdlib") == (
        "Ref: https://github.com/stdlib-js/stdlib/issues/17"
    )


def test_issue_url() -> None:
    assert issue_url("owner", "repo", 1) == "https://github.com/owner/repo/issues/1"


def test_overlong_issue_number_ignored() -> None:
    """Test a reference too long to be an issue number is skipped instead of failing."""
    assert classify_issues("See #" + "1" * 5000) == []
    assert classify_issues("Fixes #" + "9" * 5000 + " and #3") == [IssueReference(3, REFERENCES)]


def test_long_leading_zero_run_still_classified() -> None:
    """Test leading zeros do not count towards the digit limit."""
    assert _classes("Fixes #" + "0" * 50 + "7") == {7: CLOSES}


def test_many_references_in_long_body() -> None:
    """Test classification stays correct with many distinct references."""
    body = " ".join(f"fixes #{n}" if n % 2 else f"see #{n}" for n in range(1, 1001))
    classes = _classes(body)

    assert len(classes) == 1000
    assert all(classes[n] is (CLOSES if n % 2 else REFERENCES) for n in range(1, 1001))
