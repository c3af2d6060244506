"""Parsers for git log output and rename-annotated paths."""

import re
from datetime import datetime, timezone

from coedit.config import RENAME_SEPARATOR
from coedit.models import CommitRecord, FileChange, ParsedPath, PathKind


class RenamePathParser:
    """Parser for file paths as reported by ``git log --numstat``.

    Git reports a renamed file in one of two forms:

    Examples:
        src/{old.ts => new.ts}      (scoped: shared prefix/suffix)
        src/{ => lib}/util.py       (scoped: one side empty)
        README => docs/README.md    (simple: nothing shared)

    Anything that does not fit one of these forms cleanly is returned as
    a plain path so that it is kept as its own file.
    """

    # Pattern for a {old => new} segment inside a path
    SCOPED_PATTERN = re.compile(
        r"\{(?P<old>[^{}]*?)" + re.escape(RENAME_SEPARATOR) + r"(?P<new>[^{}]*?)\}"
    )

    # Pattern for a whole-path rename: old => new
    SIMPLE_PATTERN = re.compile(
        r"^(?P<old>.+?)" + re.escape(RENAME_SEPARATOR) + r"(?P<new>.+)$"
    )

    # Runs of path separators left behind by an empty branch
    DOUBLE_SEPARATOR = re.compile(r"/{2,}")

    def parse(self, path: str) -> ParsedPath:
        """Parse a reported path into a tagged result.

        Args:
            path: File path as reported by the provider

        Returns:
            ParsedPath with kind PLAIN, SIMPLE or SCOPED
        """
        plain = ParsedPath(kind=PathKind.PLAIN, key=path)

        if not path or RENAME_SEPARATOR not in path:
            return plain

        if self.SCOPED_PATTERN.search(path):
            source = self._substitute(path, "old")
            target = self._substitute(path, "new")
            if self._is_valid(source, target):
                return ParsedPath(
                    kind=PathKind.SCOPED, key=path, source=source, target=target
                )
            return plain

        # Braces without a complete {old => new} segment are malformed
        if "{" in path or "}" in path:
            return plain

        match = self.SIMPLE_PATTERN.match(path)
        if match:
            source = match.group("old").strip()
            target = match.group("new").strip()
            if self._is_valid(source, target):
                return ParsedPath(
                    kind=PathKind.SIMPLE, key=path, source=source, target=target
                )

        return plain

    def _substitute(self, path: str, branch: str) -> str:
        result = self.SCOPED_PATTERN.sub(lambda m: m.group(branch), path)
        result = self.DOUBLE_SEPARATOR.sub("/", result)
        return result.lstrip("/")

    def _is_valid(self, source: str, target: str) -> bool:
        if not source or not target or source == target:
            return False
        if RENAME_SEPARATOR in source or RENAME_SEPARATOR in target:
            return False
        return not source.endswith("/") and not target.endswith("/")


class NumstatLogParser:
    """Parser for ``git log --numstat`` output.

    Each commit starts with a header line in ``LOG_FORMAT``, followed by
    one numstat line per file::

        <insertions>\\t<deletions>\\t<path>

    Binary files report ``-`` for both counts.
    """

    RECORD_SEPARATOR = "\x1e"
    FIELD_SEPARATOR = "\x1f"

    # Passed to git log --format
    LOG_FORMAT = "%x1e%H%x1f%an%x1f%ae%x1f%at"

    def parse(self, output: str) -> list[CommitRecord]:
        """Parse git log output into commit records.

        Args:
            output: Raw stdout of git log

        Returns:
            CommitRecords in the order git reported them

        Raises:
            ValueError: If a header or numstat line is malformed
        """
        commits = []
        for block in output.split(self.RECORD_SEPARATOR):
            if not block.strip():
                continue
            commits.append(self._parse_block(block))
        return commits

    def _parse_block(self, block: str) -> CommitRecord:
        lines = block.split("\n")
        header = lines[0].split(self.FIELD_SEPARATOR)
        if len(header) != 4:
            raise ValueError(f"Malformed commit header: {lines[0]!r}")

        sha, author, email, committed = header
        try:
            timestamp = datetime.fromtimestamp(int(committed), tz=timezone.utc)
        except ValueError:
            raise ValueError(f"Malformed commit timestamp in {sha}: {committed!r}")

        files = [self.parse_numstat_line(line) for line in lines[1:] if line.strip()]

        return CommitRecord(
            author=author,
            timestamp=timestamp,
            files=files,
            sha=sha,
            author_email=email,
        )

    def parse_numstat_line(self, line: str) -> FileChange:
        """Parse one numstat line into a FileChange.

        Args:
            line: Line of the form insertions<TAB>deletions<TAB>path

        Returns:
            FileChange, flagged binary when counts are ``-``
        """
        parts = line.split("\t", 2)
        if len(parts) != 3 or not parts[2]:
            raise ValueError(f"Malformed numstat line: {line!r}")

        added, deleted, path = parts
        if added == "-" and deleted == "-":
            return FileChange(path=path, binary=True)

        try:
            insertions = int(added)
            deletions = int(deleted)
        except ValueError:
            raise ValueError(f"Malformed numstat line: {line!r}")

        return FileChange(
            path=path,
            insertions=insertions,
            deletions=deletions,
            changes=insertions + deletions,
        )
