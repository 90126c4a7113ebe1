"""
Models package for rating prediction.

Includes:
- Matrix factorization (PyTorch latent factors)
- Global-mean baseline
"""
from .base import RatingModel, resolve_device
from .baseline import GlobalMeanModel
from .factorization import MatrixFactorization

__all__ = [
    "RatingModel",
    "resolve_device",
    "GlobalMeanModel",
    "MatrixFactorization",
]
