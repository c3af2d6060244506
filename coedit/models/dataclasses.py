"""Data models for collaboration analysis."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from coedit.errors import AnalysisError


class PathKind(Enum):
    """How a reported file path encodes a rename."""

    PLAIN = "plain"
    SIMPLE = "simple"
    SCOPED = "scoped"


@dataclass(frozen=True)
class RenameEdge:
    """A file rename detected in some commit."""

    source: str
    target: str


@dataclass(frozen=True)
class ParsedPath:
    """Result of parsing a reported file path."""

    kind: PathKind
    key: str
    source: Optional[str] = None
    target: Optional[str] = None

    @property
    def is_rename(self) -> bool:
        return self.kind != PathKind.PLAIN

    @property
    def edge(self) -> Optional[RenameEdge]:
        """The rename edge, or None for plain paths."""
        if not self.is_rename:
            return None
        return RenameEdge(source=self.source, target=self.target)


@dataclass(frozen=True)
class FileChange:
    """One file touched by one commit."""

    path: str
    insertions: int = 0
    deletions: int = 0
    changes: int = 0
    binary: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileChange":
        """Build a change from a mapping, validating its shape.

        Args:
            data: Mapping with path, insertions, deletions and optional
                changes and binary keys

        Raises:
            AnalysisError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise AnalysisError(f"File change must be a mapping, got {type(data).__name__}")

        path = data.get("path", data.get("file"))
        if not isinstance(path, str) or not path:
            raise AnalysisError(f"File change is missing a path: {data!r}")

        binary = bool(data.get("binary", False))
        insertions = _count(data, "insertions", path, required=not binary)
        deletions = _count(data, "deletions", path, required=not binary)

        if data.get("changes") is None:
            changes = insertions + deletions
        else:
            changes = _count(data, "changes", path, required=True)

        return cls(
            path=path,
            insertions=insertions,
            deletions=deletions,
            changes=changes,
            binary=binary,
        )


@dataclass
class CommitRecord:
    """A non-merge commit as reported by the history provider."""

    author: str
    timestamp: datetime
    files: list[FileChange] = field(default_factory=list)
    sha: Optional[str] = None
    author_email: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CommitRecord":
        """Build a commit record from a mapping.

        The timestamp may be an ISO 8601 string, a unix timestamp or a
        datetime. Naive datetimes are taken as UTC.

        Raises:
            AnalysisError: If a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise AnalysisError(f"Commit record must be a mapping, got {type(data).__name__}")

        author = data.get("author")
        if not isinstance(author, str) or not author:
            raise AnalysisError(f"Commit record is missing an author: {data.get('sha', data)!r}")

        if "timestamp" not in data:
            raise AnalysisError(f"Commit record is missing a timestamp: {data.get('sha', author)!r}")
        timestamp = _parse_timestamp(data["timestamp"])

        files = data.get("files")
        if not isinstance(files, list):
            raise AnalysisError(f"Commit record has no file list: {data.get('sha', author)!r}")

        return cls(
            author=author,
            timestamp=timestamp,
            files=[FileChange.from_dict(f) for f in files],
            sha=data.get("sha"),
            author_email=data.get("author_email"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "sha": self.sha,
            "author": self.author,
            "author_email": self.author_email,
            "timestamp": self.timestamp.isoformat(),
            "files": [
                {
                    "path": f.path,
                    "insertions": f.insertions,
                    "deletions": f.deletions,
                    "changes": f.changes,
                    "binary": f.binary,
                }
                for f in self.files
            ],
        }


@dataclass(frozen=True)
class HistoryEntry:
    """A change attributed to a developer, filed under one file history."""

    author: str
    timestamp: datetime
    change: FileChange


# Path -> entries filed under it, in provider order
FileHistoryTable = dict[str, list[HistoryEntry]]

# Developer -> canonical path -> accumulated weight
DeveloperWeightTable = dict[str, dict[str, float]]


@dataclass
class ContributorSummary:
    """Totals for one developer."""

    developer: str
    insertions: int = 0
    deletions: int = 0
    commits: int = 0
    files_touched: int = 0

    @property
    def average_files_per_commit(self) -> float:
        """Average number of files touched per commit, 2 decimals."""
        if self.commits == 0:
            return 0.0
        return round(self.files_touched / self.commits, 2)

    def to_dict(self) -> dict[str, Any]:
        return {
            "developer": self.developer,
            "insertions": self.insertions,
            "deletions": self.deletions,
            "commits": self.commits,
            "average_files_per_commit": self.average_files_per_commit,
        }


@dataclass(frozen=True)
class SimilarityResult:
    """Similarity between two developers, developer_a < developer_b."""

    developer_a: str
    developer_b: str
    similarity: float

    @property
    def percent(self) -> int:
        """Similarity as a percentage, floored."""
        return math.floor(self.similarity * 100)

    def to_dict(self) -> dict[str, Any]:
        return {
            "developer_a": self.developer_a,
            "developer_b": self.developer_b,
            "similarity_percent": self.percent,
        }


@dataclass
class AnalysisResult:
    """Everything produced by one analysis run."""

    developers: list[str] = field(default_factory=list)
    similarities: list[SimilarityResult] = field(default_factory=list)
    top_contributors: list[ContributorSummary] = field(default_factory=list)
    contributors: list[ContributorSummary] = field(default_factory=list)
    renames: list[RenameEdge] = field(default_factory=list)
    total_commits: int = 0
    total_files: int = 0
    threshold: float = 0.6
    min_combined_weight: float = 100
    weight_function: str = "linear"

    def to_dict(self) -> dict[str, Any]:
        return {
            "settings": {
                "threshold": self.threshold,
                "min_combined_weight": self.min_combined_weight,
                "weight_function": self.weight_function,
            },
            "total_commits": self.total_commits,
            "total_files": self.total_files,
            "developers": list(self.developers),
            "renames": [{"from": r.source, "to": r.target} for r in self.renames],
            "similarities": [s.to_dict() for s in self.similarities],
            "top_contributors": [c.to_dict() for c in self.top_contributors],
        }


def _count(data: dict[str, Any], name: str, path: str, required: bool) -> int:
    value = data.get(name)
    if value is None:
        if required:
            raise AnalysisError(f"File change {path!r} is missing {name}")
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise AnalysisError(f"File change {path!r} has invalid {name}: {value!r}")
    return value


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            dt = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise AnalysisError(f"Invalid commit timestamp: {value!r}") from e
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value)
        except ValueError:
            raise AnalysisError(f"Invalid commit timestamp: {value!r}")
    else:
        raise AnalysisError(f"Invalid commit timestamp: {value!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
