"""GitPython wrapper that provides commit history for analysis."""

import json
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from coedit.errors import AnalysisError
from coedit.git.parser import NumstatLogParser
from coedit.models import CommitRecord


class GitRepositoryError(Exception):
    """Exception raised for git repository errors."""

    pass


class GitRepository:
    """Wrapper around GitPython for reading commit history.

    Commits are read with ``git log --numstat`` so that git's own rename
    annotations and binary markers reach the analysis unchanged.
    """

    def __init__(self, path: str):
        """Initialize the repository wrapper.

        Args:
            path: Path to the git repository

        Raises:
            GitRepositoryError: If path is not a valid git repository
        """
        self.path = Path(path)
        self._parser = NumstatLogParser()

        try:
            self._repo = Repo(self.path)
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise GitRepositoryError(f"Not a git repository: {path}")

    @classmethod
    def clone(cls, url: str, destination: str | Path) -> "GitRepository":
        """Clone a remote repository and wrap the clone.

        Args:
            url: Anything git clone accepts
            destination: Empty directory to clone into

        Raises:
            GitRepositoryError: If the clone fails
        """
        try:
            Repo.clone_from(url, str(destination))
        except GitCommandError as e:
            raise GitRepositoryError(f"Could not download '{url}': {e}")
        return cls(str(destination))

    @property
    def name(self) -> str:
        """Get the repository name from the directory."""
        return self.path.name

    def iter_commits(
        self,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        author: Optional[str] = None,
        branch: Optional[str] = None,
    ) -> Iterator[CommitRecord]:
        """Iterate over non-merge commits with per-file statistics.

        Args:
            since: Only include commits after this date
            until: Only include commits before this date
            author: Filter by author name or email
            branch: Branch to iterate (default: current branch)

        Yields:
            CommitRecord objects, newest first
        """
        args = [
            "--numstat",
            "--no-merges",
            "-M",
            f"--format={NumstatLogParser.LOG_FORMAT}",
        ]

        if since:
            args.append(f"--since={since.isoformat()}")
        if until:
            args.append(f"--until={until.isoformat()}")
        if author:
            args.append(f"--author={author}")
        if branch:
            args.append(branch)

        try:
            # Unquoted paths keep non-ASCII names readable
            output = self._repo.git(c="core.quotepath=off").log(*args)
        except GitCommandError as e:
            # git log fails on a repository without commits
            if not self._has_commits():
                return
            raise GitRepositoryError(f"Git command failed: {e}")

        try:
            commits = self._parser.parse(output)
        except ValueError as e:
            raise GitRepositoryError(f"Unexpected git log output: {e}")

        yield from commits

    def _has_commits(self) -> bool:
        try:
            self._repo.head.commit
        except ValueError:
            return False
        return True


def load_commit_file(path: str | Path) -> list[CommitRecord]:
    """Load commit records exported as a JSON list.

    Args:
        path: JSON file holding a list of commit mappings

    Returns:
        CommitRecords in file order

    Raises:
        AnalysisError: If the file is not a list of valid commit records
    """
    try:
        data = json.loads(Path(path).read_text())
    except json.JSONDecodeError as e:
        raise AnalysisError(f"Invalid commit file {path}: {e}")

    if not isinstance(data, list):
        raise AnalysisError(f"Commit file {path} must contain a list of commits")

    return [CommitRecord.from_dict(item) for item in data]
