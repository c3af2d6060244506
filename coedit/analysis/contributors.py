"""Rank contributors by volume of change."""

from coedit.errors import AnalysisError
from coedit.models import CommitRecord, ContributorSummary, FileHistoryTable


class ContributorRanker:
    """Compute per-developer totals and rank them.

    Insertions and deletions come from the rename-resolved history, so
    they count canonical files only. Commit counts and files touched come
    from the raw commit list and include commits whose changes are all
    binary.
    """

    def __init__(self, commits: list[CommitRecord], table: FileHistoryTable):
        self.commits = list(commits)
        self.table = table

    def summarize(self) -> list[ContributorSummary]:
        """Totals for every developer, in first-seen commit order."""
        summaries: dict[str, ContributorSummary] = {}

        for commit in self.commits:
            summary = summaries.setdefault(commit.author, ContributorSummary(commit.author))
            summary.commits += 1
            summary.files_touched += len({change.path for change in commit.files})

        for entries in self.table.values():
            for entry in entries:
                summary = summaries.setdefault(entry.author, ContributorSummary(entry.author))
                summary.insertions += entry.change.insertions
                summary.deletions += entry.change.deletions

        return list(summaries.values())

    def rank(self) -> list[ContributorSummary]:
        """All developers sorted by insertions, most first.

        The sort is stable: ties keep first-seen order.
        """
        return sorted(self.summarize(), key=lambda s: s.insertions, reverse=True)

    def top(self, limit: int = 5) -> list[ContributorSummary]:
        """The ``limit`` developers with the most insertions.

        Raises:
            AnalysisError: If limit is not a positive integer
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise AnalysisError(f"Top contributor limit must be a positive integer, got {limit!r}")
        return self.rank()[:limit]
