"""Pairwise collaboration similarity between developers."""

from typing import Optional

from coedit.errors import AnalysisError
from coedit.models import DeveloperWeightTable, SimilarityResult


class SimilarityAnalyzer:
    """Score how much two developers worked on the same files.

    For a pair (a, b) the score is the weight both put into files they
    both touched, divided by their combined weight::

        shared   = sum(w_a(f) + w_b(f) for f touched by both)
        combined = sum(w_a) + sum(w_b)

    Unlike a Jaccard index this rewards pairs that invested heavily in
    the same files, not pairs that merely touched overlapping sets.
    Pairs whose combined weight is below ``min_combined_weight`` are
    never scored.
    """

    def __init__(self, weights: DeveloperWeightTable, min_combined_weight: float = 100):
        """Initialize the analyzer.

        Args:
            weights: Developer x file weight table
            min_combined_weight: Activity floor for a pair to be scored

        Raises:
            AnalysisError: If the floor is not positive
        """
        if min_combined_weight <= 0:
            raise AnalysisError(
                f"Minimum combined weight must be positive, got {min_combined_weight}"
            )

        self.weights = weights
        self.min_combined_weight = min_combined_weight
        self._totals = {developer: sum(files.values()) for developer, files in weights.items()}

    def total_weight(self, developer: str) -> float:
        return self._totals.get(developer, 0)

    def score(self, a: str, b: str) -> Optional[float]:
        """Similarity of two developers in [0, 1].

        Returns:
            The score, or None if the pair is below the activity floor
        """
        combined = self.total_weight(a) + self.total_weight(b)
        if combined < self.min_combined_weight:
            return None
        if combined == 0:
            raise AnalysisError(f"Zero combined weight for '{a}' and '{b}'")

        a_files = self.weights.get(a, {})
        b_files = self.weights.get(b, {})

        shared = 0
        for path, a_weight in a_files.items():
            b_weight = b_files.get(path, 0)
            if a_weight == 0 or b_weight == 0:
                continue
            shared += a_weight + b_weight

        return shared / combined

    def analyze(
        self, developers: list[str], threshold: float = 0.6
    ) -> list[SimilarityResult]:
        """Find developer pairs more similar than the threshold.

        Each unordered pair is considered once, with ``developer_a``
        sorting before ``developer_b``.

        Args:
            developers: Developers to pair up, in reporting order
            threshold: Pairs must score strictly above this (0 <= x < 1)

        Returns:
            SimilarityResults in developer order
        """
        if not 0 <= threshold < 1:
            raise AnalysisError(f"Similarity threshold must be in [0, 1), got {threshold}")

        results = []
        for a in developers:
            for b in developers:
                # Don't look at pairs twice
                if a >= b:
                    continue

                similarity = self.score(a, b)
                if similarity is not None and similarity > threshold:
                    results.append(
                        SimilarityResult(developer_a=a, developer_b=b, similarity=similarity)
                    )

        return results
