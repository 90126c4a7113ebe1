"""
Inference API for single-pair rating predictions.
"""
from .inference import DEFAULT_THRESHOLD, RatingPrediction, RatingPredictor, is_recommended

__all__ = [
    "DEFAULT_THRESHOLD",
    "RatingPrediction",
    "RatingPredictor",
    "is_recommended",
]
