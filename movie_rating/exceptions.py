"""
Error types raised by the rating pipeline.

Every stage raises a subclass of MovieRatingError so callers can report
any failure with a single handler.
"""
from __future__ import annotations


class MovieRatingError(Exception):
    """Base class for all pipeline errors."""


class LoadError(MovieRatingError):
    """A ratings file is missing or a row cannot be parsed."""


class EncodingError(MovieRatingError):
    """An identifier cannot be resolved to an encoded index."""


class TrainingError(MovieRatingError):
    """Invalid trainer configuration or an empty training set."""


class EvaluationError(MovieRatingError):
    """The test set cannot be scored."""
