"""
Global-mean baseline model.
"""
from __future__ import annotations

import numpy as np

from .base import RatingModel


class GlobalMeanModel(RatingModel):
    """Predicts the mean training rating for every pair."""

    def __init__(self, mean_rating: float):
        self.mean_rating = float(mean_rating)

    def predict(self, user_idx: int, item_idx: int) -> float:
        return self.mean_rating

    def predict_batch(self, user_idx: np.ndarray, item_idx: np.ndarray) -> np.ndarray:
        return np.full(len(user_idx), self.mean_rating, dtype=np.float64)

    def __repr__(self) -> str:
        return f"GlobalMeanModel(mean_rating={self.mean_rating:.4f})"
