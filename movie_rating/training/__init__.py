"""Training module."""
from .losses import RegularizedMSELoss
from .trainer import (
    MatrixFactorizationTrainer,
    MeanRatingTrainer,
    RatingTrainer,
    TrainerConfig,
)

__all__ = [
    "MatrixFactorizationTrainer",
    "MeanRatingTrainer",
    "RatingTrainer",
    "TrainerConfig",
    "RegularizedMSELoss",
]
