"""Analysis module."""

from coedit.analysis.history import HistoryBuilder
from coedit.analysis.renames import RenameResolver
from coedit.analysis.weights import (
    ContributionAggregator,
    WEIGHT_FUNCTIONS,
    get_weight_function,
)
from coedit.analysis.similarity import SimilarityAnalyzer
from coedit.analysis.contributors import ContributorRanker
from coedit.analysis.pipeline import CollaborationAnalyzer

__all__ = [
    "HistoryBuilder",
    "RenameResolver",
    "ContributionAggregator",
    "WEIGHT_FUNCTIONS",
    "get_weight_function",
    "SimilarityAnalyzer",
    "ContributorRanker",
    "CollaborationAnalyzer",
]
