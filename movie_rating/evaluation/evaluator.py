"""
Regression evaluator for fitted rating models.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..exceptions import EvaluationError
from ..models import RatingModel
from ..utils.rich_logging import display_metrics_table
from .metrics import mean_absolute_error, mean_squared_error, r_squared, rmse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegressionMetrics:
    """Scores of a model on held-out rows."""

    rmse: float
    r_squared: float
    mae: float
    mse: float
    num_rows: int


class RegressionEvaluator:
    """
    Scores a fitted model against encoded test rows.

    Computes RMSE, R², MAE and MSE. R² is NaN when the test labels have
    zero variance.
    """

    def __init__(
        self,
        user_col: str = "user_idx",
        item_col: str = "item_idx",
        label_col: str = "label",
    ):
        self.user_col = user_col
        self.item_col = item_col
        self.label_col = label_col

    def evaluate(self, model: RatingModel, test_rows: pd.DataFrame) -> RegressionMetrics:
        """
        Evaluate a model on test rows.

        Args:
            model: Fitted rating model
            test_rows: Encoded rows with user_idx, item_idx and label

        Returns:
            RegressionMetrics

        Raises:
            EvaluationError: If there are no rows to score or the model
                produces non-finite predictions
        """
        missing = [
            col for col in (self.user_col, self.item_col, self.label_col)
            if col not in test_rows.columns
        ]
        if missing:
            raise EvaluationError(f"Test rows missing columns: {missing}")
        if len(test_rows) == 0:
            raise EvaluationError("No test rows to evaluate")

        labels = test_rows[self.label_col].to_numpy(dtype=np.float64)
        predictions = np.asarray(
            model.predict_batch(
                test_rows[self.user_col].to_numpy(dtype=np.int64),
                test_rows[self.item_col].to_numpy(dtype=np.int64),
            ),
            dtype=np.float64,
        )

        if predictions.shape != labels.shape:
            raise EvaluationError(
                f"Model returned {predictions.shape[0]} predictions for {labels.shape[0]} rows"
            )
        if not np.all(np.isfinite(predictions)):
            raise EvaluationError("Model produced non-finite predictions")

        metrics = RegressionMetrics(
            rmse=rmse(predictions, labels),
            r_squared=r_squared(predictions, labels),
            mae=mean_absolute_error(predictions, labels),
            mse=mean_squared_error(predictions, labels),
            num_rows=len(labels),
        )

        if math.isnan(metrics.r_squared):
            logger.warning("Test labels have zero variance; R² is undefined (NaN)")

        return metrics

    def print_results(self, metrics: RegressionMetrics) -> None:
        """Print evaluation results in a formatted table."""
        display_metrics_table(
            {
                "Root Mean Squared Error": metrics.rmse,
                "RSquared": metrics.r_squared,
                "Mean Absolute Error": metrics.mae,
                "Mean Squared Error": metrics.mse,
                "Rows": metrics.num_rows,
            }
        )
