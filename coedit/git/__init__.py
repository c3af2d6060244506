"""Git operations module."""

from coedit.git.repository import GitRepository, GitRepositoryError, load_commit_file
from coedit.git.parser import NumstatLogParser, RenamePathParser

__all__ = [
    "GitRepository",
    "GitRepositoryError",
    "load_commit_file",
    "NumstatLogParser",
    "RenamePathParser",
]
