from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from movie_rating.exceptions import EncodingError, TrainingError
from movie_rating.models import GlobalMeanModel, MatrixFactorization
from movie_rating.training import MatrixFactorizationTrainer, MeanRatingTrainer, TrainerConfig


def _rows(triples) -> pd.DataFrame:
    return pd.DataFrame(triples, columns=["user_idx", "item_idx", "label"])


@pytest.fixture
def small_rows() -> pd.DataFrame:
    rng = np.random.default_rng(0)
    user_f = rng.uniform(0.5, 1.5, size=(6, 2))
    item_f = rng.uniform(0.5, 1.5, size=(5, 2))
    triples = [
        (u, i, float(user_f[u] @ item_f[i]))
        for u in range(6)
        for i in range(5)
    ]
    return _rows(triples)


def _config(**overrides) -> TrainerConfig:
    params = dict(rank=4, iterations=50, learning_rate=0.1, reg=0.0, batch_size=8, verbose=False)
    params.update(overrides)
    return TrainerConfig(**params)


def test_fit_returns_model_that_reduces_error(small_rows) -> None:
    trainer = MatrixFactorizationTrainer()
    model = trainer.fit(small_rows, _config(iterations=200))

    assert isinstance(model, MatrixFactorization)
    assert model.num_users == 6
    assert model.num_items == 5
    assert len(trainer.history) == 200
    assert trainer.history[-1] < trainer.history[0]

    predictions = model.predict_batch(small_rows["user_idx"], small_rows["item_idx"])
    mean_baseline = np.mean((small_rows["label"] - small_rows["label"].mean()) ** 2)
    assert np.mean((predictions - small_rows["label"]) ** 2) < mean_baseline


def test_fit_is_reproducible(small_rows) -> None:
    first = MatrixFactorizationTrainer().fit(small_rows, _config(iterations=5))
    second = MatrixFactorizationTrainer().fit(small_rows, _config(iterations=5))
    assert first.predict(2, 3) == pytest.approx(second.predict(2, 3))


def test_predict_returns_float(small_rows) -> None:
    model = MatrixFactorizationTrainer().fit(small_rows, _config(iterations=2))
    assert isinstance(model.predict(0, 0), float)


def test_predict_out_of_range_index(small_rows) -> None:
    model = MatrixFactorizationTrainer().fit(small_rows, _config(iterations=1))
    with pytest.raises(EncodingError):
        model.predict(6, 0)
    with pytest.raises(EncodingError):
        model.predict(0, -1)


def test_table_sizes_can_be_given(small_rows) -> None:
    model = MatrixFactorizationTrainer().fit(small_rows, _config(iterations=1), num_users=10, num_items=8)
    assert model.num_users == 10
    assert model.num_items == 8


@pytest.mark.parametrize(
    "overrides",
    [{"rank": 0}, {"iterations": 0}, {"rank": -3}, {"learning_rate": 0.0}, {"batch_size": 0}, {"reg": -1.0}],
)
def test_invalid_config_raises_training_error(small_rows, overrides) -> None:
    with pytest.raises(TrainingError):
        MatrixFactorizationTrainer().fit(small_rows, _config(**overrides))


def test_empty_rows_raise_training_error() -> None:
    with pytest.raises(TrainingError, match="empty"):
        MatrixFactorizationTrainer().fit(_rows([]), _config())
    with pytest.raises(TrainingError, match="empty"):
        MeanRatingTrainer().fit(_rows([]), _config())


def test_missing_columns_raise_training_error() -> None:
    with pytest.raises(TrainingError, match="columns"):
        MatrixFactorizationTrainer().fit(pd.DataFrame({"user_idx": [0]}), _config())


def test_mean_trainer_predicts_training_mean() -> None:
    rows = _rows([(0, 0, 5.0), (0, 1, 3.0), (1, 0, 4.0)])
    model = MeanRatingTrainer().fit(rows, _config())

    assert isinstance(model, GlobalMeanModel)
    assert model.predict(1, 1) == pytest.approx(4.0)
    np.testing.assert_allclose(model.predict_batch(np.array([0, 1]), np.array([1, 0])), [4.0, 4.0])
