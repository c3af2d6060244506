"""Exceptions for coedit."""


class AnalysisError(Exception):
    """Exception raised when the analysis cannot produce a valid result.

    Covers malformed commit records, invalid settings and arithmetic
    that should be impossible given the activity floor.
    """

    pass
