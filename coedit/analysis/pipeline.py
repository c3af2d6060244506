"""Run the full collaboration analysis over a list of commits."""

from coedit.analysis.contributors import ContributorRanker
from coedit.analysis.history import HistoryBuilder
from coedit.analysis.renames import RenameResolver
from coedit.analysis.similarity import SimilarityAnalyzer
from coedit.analysis.weights import ContributionAggregator, get_weight_function
from coedit.config import (
    MIN_COMBINED_WEIGHT,
    SIMILARITY_THRESHOLD,
    TOP_CONTRIBUTORS,
    WEIGHT_FUNCTION,
)
from coedit.errors import AnalysisError
from coedit.models import AnalysisResult, CommitRecord


class CollaborationAnalyzer:
    """Analyze who works together and who contributes most.

    Takes a fully materialized list of non-merge commits and runs the
    stages in order: history table, rename resolution, weight table,
    similarity and ranking. Each stage only sees the previous stage's
    output.
    """

    def __init__(
        self,
        threshold: float = SIMILARITY_THRESHOLD,
        top: int = TOP_CONTRIBUTORS,
        min_combined_weight: float = MIN_COMBINED_WEIGHT,
        weight_function: str = WEIGHT_FUNCTION,
    ):
        """Initialize the analyzer.

        Args:
            threshold: Report pairs more similar than this (0 <= x < 1)
            top: Number of contributors to rank
            min_combined_weight: Activity floor for scoring a pair
            weight_function: Name of the change weighting policy

        Raises:
            AnalysisError: If any setting is out of range
        """
        if not 0 <= threshold < 1:
            raise AnalysisError(f"Similarity threshold must be in [0, 1), got {threshold}")
        if isinstance(top, bool) or not isinstance(top, int) or top < 1:
            raise AnalysisError(f"Top contributor limit must be a positive integer, got {top!r}")
        if min_combined_weight <= 0:
            raise AnalysisError(
                f"Minimum combined weight must be positive, got {min_combined_weight}"
            )

        self.threshold = threshold
        self.top = top
        self.min_combined_weight = min_combined_weight
        self.weight_function = weight_function
        self._weight = get_weight_function(weight_function)

    def analyze(self, commits: list[CommitRecord]) -> AnalysisResult:
        """Run the analysis.

        Args:
            commits: Non-merge commits, in provider order

        Returns:
            AnalysisResult with similar pairs and top contributors
        """
        commits = list(commits)

        builder = HistoryBuilder(commits)
        history = builder.build()

        resolved, renames = RenameResolver().resolve(history)

        weights = ContributionAggregator(self._weight).aggregate(resolved, builder.developers)
        similarities = SimilarityAnalyzer(weights, self.min_combined_weight).analyze(
            builder.developers, self.threshold
        )

        ranker = ContributorRanker(commits, resolved)
        contributors = ranker.rank()

        return AnalysisResult(
            developers=list(builder.developers),
            similarities=similarities,
            top_contributors=contributors[: self.top],
            contributors=contributors,
            renames=renames,
            total_commits=len(commits),
            total_files=len(resolved),
            threshold=self.threshold,
            min_combined_weight=self.min_combined_weight,
            weight_function=self.weight_function,
        )
