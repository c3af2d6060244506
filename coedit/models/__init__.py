"""Data models for coedit."""

from coedit.models.dataclasses import (
    PathKind,
    RenameEdge,
    ParsedPath,
    FileChange,
    CommitRecord,
    HistoryEntry,
    FileHistoryTable,
    DeveloperWeightTable,
    ContributorSummary,
    SimilarityResult,
    AnalysisResult,
)

__all__ = [
    "PathKind",
    "RenameEdge",
    "ParsedPath",
    "FileChange",
    "CommitRecord",
    "HistoryEntry",
    "FileHistoryTable",
    "DeveloperWeightTable",
    "ContributorSummary",
    "SimilarityResult",
    "AnalysisResult",
]
