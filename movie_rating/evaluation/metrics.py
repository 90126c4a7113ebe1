"""
Regression metrics for rating prediction.

Implements:
- RMSE
- MSE
- MAE
- R² (coefficient of determination)
"""
from __future__ import annotations

from typing import Union

import numpy as np
import torch

ArrayLike = Union[np.ndarray, torch.Tensor, list]


def _to_numpy(x: ArrayLike) -> np.ndarray:
    """Convert input to a float64 numpy array."""
    if isinstance(x, torch.Tensor):
        x = x.detach().cpu().numpy()
    return np.asarray(x, dtype=np.float64)


def _pair(predictions: ArrayLike, labels: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    predictions = _to_numpy(predictions)
    labels = _to_numpy(labels)
    if predictions.shape != labels.shape:
        raise ValueError(
            f"Shape mismatch: predictions {predictions.shape} vs labels {labels.shape}"
        )
    if predictions.size == 0:
        raise ValueError("Cannot compute a metric over zero rows")
    return predictions, labels


def mean_squared_error(predictions: ArrayLike, labels: ArrayLike) -> float:
    """
    Compute MSE.

    MSE = mean((pred - label)^2)
    """
    predictions, labels = _pair(predictions, labels)
    return float(np.mean((predictions - labels) ** 2))


def rmse(predictions: ArrayLike, labels: ArrayLike) -> float:
    """
    Compute root mean squared error.

    RMSE = sqrt(mean((pred - label)^2))
    """
    return float(np.sqrt(mean_squared_error(predictions, labels)))


def mean_absolute_error(predictions: ArrayLike, labels: ArrayLike) -> float:
    """
    Compute MAE.

    MAE = mean(|pred - label|)
    """
    predictions, labels = _pair(predictions, labels)
    return float(np.mean(np.abs(predictions - labels)))


def r_squared(predictions: ArrayLike, labels: ArrayLike) -> float:
    """
    Compute the coefficient of determination.

    R² = 1 - SS_res / SS_tot, with SS_tot taken around the mean label.

    Args:
        predictions: Predicted ratings
        labels: Observed ratings

    Returns:
        R² score, or NaN when the labels have zero variance
    """
    predictions, labels = _pair(predictions, labels)

    ss_res = np.sum((labels - predictions) ** 2)
    ss_tot = np.sum((labels - labels.mean()) ** 2)

    if ss_tot == 0:
        return float("nan")

    return float(1.0 - ss_res / ss_tot)
