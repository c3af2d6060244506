"""Turn resolved file histories into per-developer weights."""

import math
from typing import Callable

from coedit.errors import AnalysisError
from coedit.models import DeveloperWeightTable, FileHistoryTable

WeightFunction = Callable[[int], float]


def linear_weight(changes: int) -> float:
    """Similar if developers worked on the same files and a little on others."""
    return changes


def sqrt_weight(changes: int) -> float:
    """Similar if developers worked on the same files and maybe more on others."""
    return math.sqrt(changes)


def squared_weight(changes: int) -> float:
    """Similar if developers worked a lot on the same files and little else."""
    return changes**2


WEIGHT_FUNCTIONS: dict[str, WeightFunction] = {
    "linear": linear_weight,
    "sqrt": sqrt_weight,
    "squared": squared_weight,
}


def get_weight_function(name: str) -> WeightFunction:
    """Look up a weight function by name.

    Raises:
        AnalysisError: If no function has that name
    """
    try:
        return WEIGHT_FUNCTIONS[name]
    except KeyError:
        choices = ", ".join(sorted(WEIGHT_FUNCTIONS))
        raise AnalysisError(f"Unknown weight function '{name}' (choose from {choices})")


class ContributionAggregator:
    """Accumulate how much each developer changed each file.

    Weight is additive and independent of entry order. Entries whose
    weight is zero are skipped so that they cannot be mistaken for
    actual work on the file.
    """

    def __init__(self, weight: WeightFunction = linear_weight):
        self.weight = weight

    def aggregate(
        self, table: FileHistoryTable, developers: list[str] | None = None
    ) -> DeveloperWeightTable:
        """Build the developer x file weight table.

        Args:
            table: Rename-resolved history table
            developers: Developers that get a row even without weight

        Returns:
            Mapping of developer to file to accumulated weight
        """
        weights: DeveloperWeightTable = {developer: {} for developer in developers or []}

        for path, entries in table.items():
            for entry in entries:
                if entry.change.binary:
                    continue

                weight = self.weight(entry.change.changes)
                if weight == 0:
                    continue

                files = weights.setdefault(entry.author, {})
                files[path] = files.get(path, 0) + weight

        return weights
