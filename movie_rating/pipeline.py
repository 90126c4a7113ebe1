"""
End-to-end rating pipeline: load, encode, train, evaluate, predict.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .api import DEFAULT_THRESHOLD, RatingPrediction, RatingPredictor
from .data import RatingDataModule
from .evaluation import RegressionEvaluator, RegressionMetrics
from .models import RatingModel
from .training import MatrixFactorizationTrainer, RatingTrainer, TrainerConfig

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outputs of one pipeline run."""

    metrics: RegressionMetrics
    prediction: RatingPrediction
    model: RatingModel


def run_pipeline(
    train_path: str | Path,
    test_path: str | Path,
    trainer_config: TrainerConfig,
    query_user: float,
    query_item: float,
    threshold: float = DEFAULT_THRESHOLD,
    trainer: Optional[RatingTrainer] = None,
) -> PipelineResult:
    """
    Run the full pipeline once.

    Args:
        train_path: Training ratings CSV
        test_path: Held-out ratings CSV
        trainer_config: Trainer configuration
        query_user: Raw user id of the single prediction
        query_item: Raw item id of the single prediction
        threshold: Recommendation threshold
        trainer: Trainer to use (default: MatrixFactorizationTrainer)

    Returns:
        PipelineResult

    Raises:
        MovieRatingError: Any stage failure, propagated unchanged
    """
    trainer = trainer or MatrixFactorizationTrainer()

    data_module = RatingDataModule(train_path, test_path)
    data_module.setup()

    model = trainer.fit(
        data_module.train_df,
        trainer_config,
        num_users=data_module.num_users,
        num_items=data_module.num_items,
    )

    metrics = RegressionEvaluator().evaluate(model, data_module.test_df)
    logger.info("RMSE: %.4f | R²: %.4f", metrics.rmse, metrics.r_squared)

    predictor = RatingPredictor(model, data_module.encoders, threshold=threshold)
    prediction = predictor.predict(query_user, query_item)

    return PipelineResult(metrics=metrics, prediction=prediction, model=model)
