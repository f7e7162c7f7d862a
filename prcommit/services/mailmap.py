"""Canonical contributor identities backed by a mailmap-style alias file.

Each non-comment line of the alias file holds one or more ``Name <email>`` pairs.
The first pair on a line is the canonical identity; any further pairs are the
historical names and addresses it replaces, e.g.::

    Jane Doe <jane@example.com> Jane D <jdoe@old-employer.com>

Lookups are plain case-insensitive substring searches over the raw lines and the
first matching line wins, so the table keeps the file's order.
"""

import re
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path

logger = getLogger(__name__)

IDENTITY_PATTERN = re.compile(r"(?P<name>[^<>]*?)\s*<(?P<email>[^<>]*)>")
TRAILING_COMMENT_PATTERN = re.compile(r"\s#.*$")


def _strip_comment(line: str) -> str:
    """Drop a whole-line comment, or a whitespace-separated `#` comment after the last address.

    A `#` inside a name or address (`C# Team <csharp@example.com>`) is kept.
    """
    line = line.strip()
    if line.startswith("#"):
        return ""
    end = line.rfind(">") + 1
    return (line[:end] + TRAILING_COMMENT_PATTERN.sub("", line[end:])).strip()


@dataclass(frozen=True)
class Identity:
    """A contributor's display name and email address."""

    name: str
    email: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    @classmethod
    def parse(cls, text: str) -> "Identity | None":
        """Parse the first ``Name <email>`` pair in text.

        Returns:
            The identity, or None when there is no bracketed address or the name is empty
        """
        match = IDENTITY_PATTERN.search(text)
        if match is None:
            return None
        name = match.group("name").strip()
        if not name:
            return None
        return cls(name=name, email=match.group("email").strip())


@dataclass(frozen=True)
class AliasRecord:
    """One line of the alias file."""

    raw: str
    canonical: Identity


class AliasTable:
    """Ordered alias records with first-match lookup."""

    def __init__(self, records: list[AliasRecord] | None = None) -> None:
        self.records: list[AliasRecord] = list(records or [])

    def __len__(self) -> int:
        return len(self.records)

    @classmethod
    def parse(cls, text: str) -> "AliasTable":
        """Parse alias file content, skipping blank lines, comments and lines without a named identity."""
        records: list[AliasRecord] = []
        for line in text.splitlines():
            line = _strip_comment(line)
            if not line:
                continue
            canonical = Identity.parse(line)
            if canonical is None:
                logger.debug(f"Skipping alias entry without a canonical name: {line!r}")
                continue
            records.append(AliasRecord(raw=line, canonical=canonical))
        return cls(records)

    @classmethod
    def load(cls, path: Path) -> "AliasTable":
        """Load the alias file at path; a missing or unreadable file gives an empty table."""
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning(f"Alias file not found at {path}; identities will not be canonicalized")
            return cls()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Unable to read alias file {path}: {e}; identities will not be canonicalized")
            return cls()

        table = cls.parse(text)
        logger.debug(f"Loaded {len(table)} alias records from {path}")
        return table

    def find(self, needle: str) -> AliasRecord | None:
        """Return the first record containing needle, compared case-insensitively."""
        if not needle:
            return None
        needle = needle.lower()
        for record in self.records:
            if needle in record.raw.lower():
                return record
        return None


class IdentityResolver:
    """Resolves commit identities and platform handles to canonical ``Name <email>`` strings.

    Resolution never fails; when the alias table has no match the raw identity is
    returned, or for handles a noreply placeholder address.
    """

    def __init__(self, alias_table: AliasTable, noreply_host: str = "github.com") -> None:
        self.alias_table = alias_table
        self.noreply_host = noreply_host
        self._cache: dict[tuple[str, str], str] = {}

    @classmethod
    def from_repo_root(cls, repo_root: Path, noreply_host: str = "github.com") -> "IdentityResolver":
        """Build a resolver from the ``.mailmap`` at the root of a repository checkout."""
        return cls(AliasTable.load(Path(repo_root) / ".mailmap"), noreply_host=noreply_host)

    def resolve_name_email(self, name: str, email: str) -> str:
        """Resolve a name and email pair, e.g. from commit author metadata."""
        raw = str(Identity(name=name.strip(), email=email.strip()))
        key = ("identity", raw)
        if key not in self._cache:
            record = self.alias_table.find(raw)
            self._cache[key] = str(record.canonical) if record else raw
        return self._cache[key]

    def resolve_handle(self, handle: str) -> str:
        """Resolve a platform handle such as a GitHub login.

        Returns an empty string for an empty handle.
        """
        handle = handle.strip()
        if not handle:
            return ""
        key = ("handle", handle)
        if key not in self._cache:
            record = self.alias_table.find(handle)
            if record:
                self._cache[key] = str(record.canonical)
            else:
                self._cache[key] = f"{handle} <{handle}@users.noreply.{self.noreply_host}>"
        return self._cache[key]
