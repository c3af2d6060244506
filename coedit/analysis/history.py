"""Build per-file histories from commit records."""

from coedit.models import CommitRecord, FileHistoryTable, HistoryEntry


class HistoryBuilder:
    """Group commit changes by the path they were reported under.

    Binary changes are dropped here so that no later stage sees them.
    Developers are recorded in the order they first appear with a
    non-binary change.
    """

    def __init__(self, commits: list[CommitRecord]):
        self.commits = list(commits)
        self.developers: list[str] = []

    def build(self) -> FileHistoryTable:
        """Build the history table.

        Returns:
            Mapping of reported path to its HistoryEntry list
        """
        table: FileHistoryTable = {}
        seen = set()
        self.developers = []

        for commit in self.commits:
            for change in commit.files:
                if change.binary:
                    continue

                entry = HistoryEntry(
                    author=commit.author,
                    timestamp=commit.timestamp,
                    change=change,
                )
                table.setdefault(change.path, []).append(entry)

                if commit.author not in seen:
                    seen.add(commit.author)
                    self.developers.append(commit.author)

        return table
