"""Builders for test data."""

from datetime import datetime, timezone

from coedit.models import FileChange, HistoryEntry


BASE_TIME = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


def change(path, insertions=0, deletions=0, binary=False):
    """FileChange with changes derived from the line counts."""
    return FileChange(
        path=path,
        insertions=insertions,
        deletions=deletions,
        changes=insertions + deletions,
        binary=binary,
    )


def entry(author, path="f", changes=10):
    """HistoryEntry with all changes counted as insertions."""
    return HistoryEntry(
        author=author,
        timestamp=BASE_TIME,
        change=change(path, insertions=changes),
    )
