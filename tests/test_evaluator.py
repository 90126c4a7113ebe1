from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from movie_rating.data.loader import RatingRecord, records_to_frame
from movie_rating.data.preprocessor import DataPreprocessor
from movie_rating.evaluation import RegressionEvaluator
from movie_rating.exceptions import EvaluationError
from movie_rating.models import RatingModel
from movie_rating.training import MeanRatingTrainer, TrainerConfig


class LookupModel(RatingModel):
    """Returns a fixed score per (user_idx, item_idx)."""

    def __init__(self, scores: dict[tuple[int, int], float]):
        self.scores = scores

    def predict(self, user_idx: int, item_idx: int) -> float:
        return self.scores[(user_idx, item_idx)]


def _test_rows(triples) -> pd.DataFrame:
    return pd.DataFrame(triples, columns=["user_idx", "item_idx", "label"])


def test_exact_predictions_give_zero_rmse_and_unit_r_squared() -> None:
    rows = _test_rows([(0, 0, 5.0), (0, 1, 3.0), (1, 0, 4.0)])
    model = LookupModel({(0, 0): 5.0, (0, 1): 3.0, (1, 0): 4.0})

    metrics = RegressionEvaluator().evaluate(model, rows)

    assert metrics.rmse == 0.0
    assert metrics.r_squared == 1.0
    assert metrics.mae == 0.0
    assert metrics.num_rows == 3


def test_identical_labels_give_nan_r_squared() -> None:
    rows = _test_rows([(0, 0, 4.0), (1, 1, 4.0)])
    model = LookupModel({(0, 0): 3.0, (1, 1): 5.0})

    metrics = RegressionEvaluator().evaluate(model, rows)

    assert metrics.rmse == pytest.approx(1.0)
    assert math.isnan(metrics.r_squared)


def test_mean_trainer_end_to_end_scenario() -> None:
    preprocessor = DataPreprocessor()
    train = preprocessor.fit_transform(
        records_to_frame(
            [RatingRecord(1, 1, 5.0), RatingRecord(1, 2, 3.0), RatingRecord(2, 1, 4.0)]
        )
    )
    test = preprocessor.transform(records_to_frame([RatingRecord(1, 1, 5.0)]))

    model = MeanRatingTrainer().fit(train, TrainerConfig(verbose=False))
    metrics = RegressionEvaluator().evaluate(model, test)

    assert metrics.rmse == pytest.approx(1.0)
    assert math.isnan(metrics.r_squared)


def test_empty_test_rows_raise_evaluation_error() -> None:
    with pytest.raises(EvaluationError):
        RegressionEvaluator().evaluate(LookupModel({}), _test_rows([]))


def test_non_finite_predictions_raise_evaluation_error() -> None:
    rows = _test_rows([(0, 0, 5.0), (0, 1, 3.0)])
    model = LookupModel({(0, 0): np.nan, (0, 1): 3.0})
    with pytest.raises(EvaluationError, match="non-finite"):
        RegressionEvaluator().evaluate(model, rows)


def test_print_results_renders() -> None:
    rows = _test_rows([(0, 0, 5.0), (0, 1, 3.0)])
    metrics = RegressionEvaluator().evaluate(LookupModel({(0, 0): 4.0, (0, 1): 3.0}), rows)
    RegressionEvaluator().print_results(metrics)
