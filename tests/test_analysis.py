"""Tests for the analysis module."""

import math

import pytest

from coedit.analysis import (
    CollaborationAnalyzer,
    ContributionAggregator,
    ContributorRanker,
    HistoryBuilder,
    RenameResolver,
    SimilarityAnalyzer,
    get_weight_function,
)
from coedit.analysis.weights import sqrt_weight, squared_weight
from coedit.errors import AnalysisError

from tests.helpers import change, entry


class TestHistoryBuilder:
    """Tests for HistoryBuilder."""

    def test_groups_by_path(self, make_commit):
        """Entries are filed under the reported path."""
        commits = [
            make_commit("Alice", change("a.py", 1), change("b.py", 2)),
            make_commit("Bob", change("a.py", 3)),
        ]

        table = HistoryBuilder(commits).build()

        assert list(table) == ["a.py", "b.py"]
        assert [e.author for e in table["a.py"]] == ["Alice", "Bob"]
        assert table["a.py"][0].timestamp == commits[0].timestamp

    def test_binary_excluded(self, make_commit):
        """Binary changes never reach the table."""
        commits = [make_commit("Alice", change("logo.png", binary=True))]

        builder = HistoryBuilder(commits)

        assert builder.build() == {}
        assert builder.developers == []

    def test_developers_first_seen(self, make_commit):
        """Developers are listed in order of first appearance."""
        commits = [
            make_commit("Carol", change("a.py", 1)),
            make_commit("Alice", change("a.py", 1)),
            make_commit("Carol", change("b.py", 1)),
        ]

        builder = HistoryBuilder(commits)
        builder.build()

        assert builder.developers == ["Carol", "Alice"]


class TestContributionAggregator:
    """Tests for ContributionAggregator."""

    def test_accumulates_changes(self):
        """Weights add up per developer and file."""
        table = {
            "a.py": [entry("X", "a.py", 10), entry("X", "a.py", 5), entry("Y", "a.py", 7)],
            "b.py": [entry("Y", "b.py", 3)],
        }

        weights = ContributionAggregator().aggregate(table)

        assert weights == {"X": {"a.py": 15}, "Y": {"a.py": 7, "b.py": 3}}

    def test_zero_changes_skipped(self):
        """Zero-change entries leave no trace."""
        table = {"a.py": [entry("X", "a.py", 0)]}

        weights = ContributionAggregator().aggregate(table, ["X"])

        assert weights == {"X": {}}

    def test_binary_skipped(self):
        """Binary entries are ignored even if present."""
        from coedit.models import HistoryEntry
        from tests.helpers import BASE_TIME

        binary = HistoryEntry("X", BASE_TIME, change("logo.png", 10, binary=True))

        assert ContributionAggregator().aggregate({"logo.png": [binary]}) == {}

    def test_every_developer_gets_row(self):
        """Known developers without weight still appear."""
        weights = ContributionAggregator().aggregate({}, ["X", "Y"])
        assert weights == {"X": {}, "Y": {}}

    def test_order_independent(self):
        """Entry order does not change the result."""
        entries = [entry("X", "a.py", n) for n in (1, 2, 3, 4)]

        forward = ContributionAggregator().aggregate({"a.py": entries})
        backward = ContributionAggregator().aggregate({"a.py": entries[::-1]})

        assert forward == backward

    def test_replaceable_weight(self):
        """A different weight function changes the weights."""
        table = {"a.py": [entry("X", "a.py", 9)]}

        assert ContributionAggregator(sqrt_weight).aggregate(table) == {"X": {"a.py": 3.0}}
        assert ContributionAggregator(squared_weight).aggregate(table) == {"X": {"a.py": 81}}

    def test_weight_function_lookup(self):
        """Weight functions are found by name."""
        assert get_weight_function("linear")(4) == 4
        assert get_weight_function("sqrt")(16) == 4

        with pytest.raises(AnalysisError, match="Unknown weight function"):
            get_weight_function("cubic")


class TestSimilarityAnalyzer:
    """Tests for SimilarityAnalyzer."""

    def test_below_floor_excluded(self):
        """10 + 10 combined weight is below the floor of 100."""
        weights = {"X": {"f": 10}, "Y": {"f": 10}}
        analyzer = SimilarityAnalyzer(weights, min_combined_weight=100)

        assert analyzer.score("X", "Y") is None
        assert analyzer.analyze(["X", "Y"], threshold=0.0) == []

    def test_full_overlap(self):
        """60 + 60 on the same single file is 100% similar."""
        weights = {"X": {"f": 60}, "Y": {"f": 60}}

        results = SimilarityAnalyzer(weights).analyze(["X", "Y"], threshold=0.6)

        assert len(results) == 1
        assert results[0].developer_a == "X"
        assert results[0].developer_b == "Y"
        assert results[0].similarity == 1.0
        assert results[0].percent == 100

    def test_shared_weight_sums_both_sides(self):
        """Shared files count both developers' weight."""
        weights = {"X": {"f": 60, "g": 40}, "Y": {"f": 20, "h": 80}}

        score = SimilarityAnalyzer(weights).score("X", "Y")

        assert score == pytest.approx(80 / 200)

    def test_percent_floored(self):
        """Percentages are floored."""
        weights = {"X": {"f": 100, "g": 1}, "Y": {"f": 100, "h": 1}}

        results = SimilarityAnalyzer(weights).analyze(["X", "Y"])

        assert results[0].percent == math.floor(200 / 202 * 100) == 99

    def test_threshold_is_strict(self):
        """A score equal to the threshold is not reported."""
        weights = {"X": {"f": 50, "g": 50}, "Y": {"f": 50, "h": 50}}
        analyzer = SimilarityAnalyzer(weights)

        assert analyzer.score("X", "Y") == 0.5
        assert analyzer.analyze(["X", "Y"], threshold=0.5) == []
        assert len(analyzer.analyze(["X", "Y"], threshold=0.49)) == 1

    def test_symmetric(self):
        """score(a, b) == score(b, a)."""
        weights = {
            "X": {"f": 30, "g": 70},
            "Y": {"f": 90, "h": 10},
            "Z": {"g": 5, "h": 200},
        }
        analyzer = SimilarityAnalyzer(weights)

        for a in weights:
            for b in weights:
                assert analyzer.score(a, b) == analyzer.score(b, a)

    def test_pairs_ordered_and_unique(self):
        """Each pair appears once with a < b and no self pairs."""
        weights = {name: {"f": 100} for name in ("Zed", "Amy", "Kim")}

        results = SimilarityAnalyzer(weights).analyze(["Zed", "Amy", "Kim"], threshold=0.0)
        pairs = [(r.developer_a, r.developer_b) for r in results]

        assert sorted(pairs) == [("Amy", "Kim"), ("Amy", "Zed"), ("Kim", "Zed")]
        assert all(a < b for a, b in pairs)

    def test_threshold_monotonic(self):
        """Raising the threshold never adds pairs."""
        weights = {
            "A": {"f": 100, "g": 20},
            "B": {"f": 80, "h": 60},
            "C": {"g": 90, "h": 10},
            "D": {"f": 5, "g": 5, "h": 5, "i": 100},
        }
        analyzer = SimilarityAnalyzer(weights)
        developers = list(weights)

        previous = None
        for threshold in (0.0, 0.2, 0.4, 0.6, 0.8, 0.95):
            current = {(r.developer_a, r.developer_b) for r in analyzer.analyze(developers, threshold)}
            if previous is not None:
                assert current <= previous
            previous = current

    def test_no_overlap(self):
        """Developers on disjoint files score zero."""
        weights = {"X": {"f": 100}, "Y": {"g": 100}}
        assert SimilarityAnalyzer(weights).score("X", "Y") == 0

    def test_invalid_threshold(self):
        """Thresholds outside [0, 1) are rejected."""
        analyzer = SimilarityAnalyzer({})
        with pytest.raises(AnalysisError):
            analyzer.analyze([], threshold=1.0)
        with pytest.raises(AnalysisError):
            analyzer.analyze([], threshold=-0.1)

    def test_invalid_floor(self):
        """A non-positive floor would allow division by zero."""
        with pytest.raises(AnalysisError, match="positive"):
            SimilarityAnalyzer({}, min_combined_weight=0)


class TestContributorRanker:
    """Tests for ContributorRanker."""

    def test_totals(self, make_commit):
        """Line totals come from history, commit totals from raw commits."""
        commits = [
            make_commit("Alice", change("a.py", 10, 2), change("b.png", binary=True)),
            make_commit("Alice", change("a.py", 5, 1)),
        ]
        table = HistoryBuilder(commits).build()

        [alice] = ContributorRanker(commits, table).rank()

        assert alice.insertions == 15
        assert alice.deletions == 3
        assert alice.commits == 2
        assert alice.files_touched == 3
        assert alice.average_files_per_commit == 1.5

    def test_binary_only_commits_counted(self, make_commit):
        """Commits with only binary changes still count as commits."""
        commits = [make_commit("Dana", change("logo.png", binary=True))]
        table = HistoryBuilder(commits).build()

        [dana] = ContributorRanker(commits, table).rank()

        assert dana.commits == 1
        assert dana.insertions == 0
        assert dana.average_files_per_commit == 1.0

    def test_repeated_path_counts_once(self, make_commit):
        """A path listed twice in one commit is one file touched."""
        commits = [make_commit("Alice", change("a.py", 3), change("a.py", 2))]
        table = HistoryBuilder(commits).build()

        [alice] = ContributorRanker(commits, table).summarize()

        assert alice.files_touched == 1
        assert alice.average_files_per_commit == 1.0
        assert alice.insertions == 5

    def test_sorted_by_insertions(self, make_commit):
        """Most insertions first."""
        commits = [
            make_commit("Low", change("a.py", 1)),
            make_commit("High", change("a.py", 100)),
            make_commit("Mid", change("a.py", 50)),
        ]
        table = HistoryBuilder(commits).build()

        ranked = ContributorRanker(commits, table).rank()

        assert [s.developer for s in ranked] == ["High", "Mid", "Low"]

    def test_ties_keep_first_seen_order(self, make_commit):
        """Equal insertions keep the order developers first appeared."""
        commits = [
            make_commit("Second", change("a.py", 10)),
            make_commit("First", change("a.py", 10)),
            make_commit("Third", change("a.py", 10)),
        ]
        table = HistoryBuilder(commits).build()

        ranked = ContributorRanker(commits, table).rank()

        assert [s.developer for s in ranked] == ["Second", "First", "Third"]

    def test_top_limit(self, make_commit):
        """top(n) returns at most n developers."""
        commits = [make_commit(name, change("a.py", n)) for n, name in enumerate("ABCDEFG", 1)]
        table = HistoryBuilder(commits).build()
        ranker = ContributorRanker(commits, table)

        assert [s.developer for s in ranker.top(3)] == ["G", "F", "E"]
        assert len(ranker.top(50)) == 7

    def test_invalid_limit(self, make_commit):
        """Non-positive limits are rejected."""
        ranker = ContributorRanker([], {})
        with pytest.raises(AnalysisError):
            ranker.top(0)

    def test_uses_resolved_history(self, renamed_commits):
        """Insertions under old and new names count once each."""
        table, _ = RenameResolver().resolve(HistoryBuilder(renamed_commits).build())

        ranked = ContributorRanker(renamed_commits, table).rank()
        totals = {s.developer: (s.insertions, s.deletions, s.commits) for s in ranked}

        assert totals == {"Alice": (90, 10, 2), "Bob": (5, 5, 1)}


class TestCollaborationAnalyzer:
    """Tests for the full pipeline."""

    def test_no_commits(self):
        """Zero commits give empty results without errors."""
        result = CollaborationAnalyzer().analyze([])

        assert result.similarities == []
        assert result.top_contributors == []
        assert result.total_commits == 0

    def test_rename_links_history(self, renamed_commits):
        """Alice's edits before and after the rename are one file."""
        result = CollaborationAnalyzer(threshold=0.5).analyze(renamed_commits)

        assert result.total_files == 1
        assert [(r.source, r.target) for r in result.renames] == [("src/old.py", "src/new.py")]
        [pair] = result.similarities
        assert (pair.developer_a, pair.developer_b) == ("Alice", "Bob")
        assert pair.percent == 100

    def test_team(self, team_commits):
        """Alice and Bob share app.py; Carol's work is separate."""
        result = CollaborationAnalyzer(threshold=0.6, top=2).analyze(team_commits)

        pairs = {(r.developer_a, r.developer_b): r.percent for r in result.similarities}
        assert pairs == {("Alice", "Bob"): 96}
        assert [c.developer for c in result.top_contributors] == ["Carol", "Alice"]
        assert len(result.contributors) == 3
        assert result.developers == ["Alice", "Bob", "Carol"]

    def test_small_activity_ignored(self, make_commit):
        """Pairs below the activity floor are never reported."""
        commits = [
            make_commit("X", change("f", 10)),
            make_commit("Y", change("f", 10)),
        ]

        result = CollaborationAnalyzer(threshold=0.0).analyze(commits)

        assert result.similarities == []

    def test_invalid_settings(self):
        """Out of range settings are rejected up front."""
        with pytest.raises(AnalysisError):
            CollaborationAnalyzer(threshold=1.5)
        with pytest.raises(AnalysisError):
            CollaborationAnalyzer(top=0)
        with pytest.raises(AnalysisError):
            CollaborationAnalyzer(min_combined_weight=-1)
        with pytest.raises(AnalysisError):
            CollaborationAnalyzer(weight_function="cubic")
