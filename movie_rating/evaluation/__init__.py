"""Evaluation module."""
from .evaluator import RegressionEvaluator, RegressionMetrics
from .metrics import mean_absolute_error, mean_squared_error, r_squared, rmse

__all__ = [
    "mean_absolute_error",
    "mean_squared_error",
    "r_squared",
    "rmse",
    "RegressionEvaluator",
    "RegressionMetrics",
]
