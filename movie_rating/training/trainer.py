"""
Trainers that fit rating models on encoded training rows.

Supports:
- Matrix factorization (PyTorch, Adagrad over regularized squared error)
- Global-mean baseline

Every trainer follows the same contract: ``fit(rows, config) -> RatingModel``
where ``rows`` is a dataframe with ``user_idx``, ``item_idx`` and ``label``
columns.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import numpy as np
import pandas as pd
import torch
from tqdm import tqdm

from ..exceptions import TrainingError
from ..models import GlobalMeanModel, MatrixFactorization, RatingModel
from ..utils.rich_logging import display_model_summary
from .losses import RegularizedMSELoss

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("user_idx", "item_idx", "label")


@dataclass
class TrainerConfig:
    """Trainer configuration."""

    # Factorization
    rank: int = 100
    iterations: int = 20

    # Optimizer
    learning_rate: float = 0.1
    reg: float = 0.1
    batch_size: int = 1024

    # Misc
    seed: int = 42
    device: str = "cpu"
    verbose: bool = True

    def validate(self) -> None:
        """Raise TrainingError if any setting is out of range."""
        if self.rank <= 0:
            raise TrainingError(f"rank must be > 0, got {self.rank}")
        if self.iterations <= 0:
            raise TrainingError(f"iterations must be > 0, got {self.iterations}")
        if self.learning_rate <= 0:
            raise TrainingError(f"learning_rate must be > 0, got {self.learning_rate}")
        if self.reg < 0:
            raise TrainingError(f"reg must be >= 0, got {self.reg}")
        if self.batch_size <= 0:
            raise TrainingError(f"batch_size must be > 0, got {self.batch_size}")


class RatingTrainer(Protocol):
    """Anything that can fit a rating model."""

    def fit(
        self,
        rows: pd.DataFrame,
        config: TrainerConfig,
        num_users: Optional[int] = None,
        num_items: Optional[int] = None,
    ) -> RatingModel:
        ...


def _check_rows(rows: pd.DataFrame) -> None:
    missing = [col for col in REQUIRED_COLUMNS if col not in rows.columns]
    if missing:
        raise TrainingError(f"Training rows missing columns: {missing}")
    if len(rows) == 0:
        raise TrainingError("Cannot train on an empty dataset")
    if rows[list(REQUIRED_COLUMNS)].isna().any().any():
        raise TrainingError("Training rows contain null values")
    if (rows["user_idx"] < 0).any() or (rows["item_idx"] < 0).any():
        raise TrainingError("Training rows contain negative encoded indices")


class MatrixFactorizationTrainer:
    """
    Fits a MatrixFactorization model.

    One iteration is one shuffled pass over the training rows in mini-batches.
    """

    def __init__(self):
        self.history: list[float] = []

    def fit(
        self,
        rows: pd.DataFrame,
        config: TrainerConfig,
        num_users: Optional[int] = None,
        num_items: Optional[int] = None,
    ) -> MatrixFactorization:
        """
        Train a matrix factorization model.

        Args:
            rows: Encoded training rows (user_idx, item_idx, label)
            config: Trainer configuration
            num_users: Size of the user factor table (default: max index + 1)
            num_items: Size of the item factor table (default: max index + 1)

        Returns:
            Fitted model

        Raises:
            TrainingError: If the rows are empty or the config is invalid
        """
        config.validate()
        _check_rows(rows)

        user_idx = rows["user_idx"].to_numpy(dtype=np.int64)
        item_idx = rows["item_idx"].to_numpy(dtype=np.int64)
        labels = rows["label"].to_numpy(dtype=np.float32)

        num_users = num_users if num_users is not None else int(user_idx.max()) + 1
        num_items = num_items if num_items is not None else int(item_idx.max()) + 1
        if user_idx.max() >= num_users or item_idx.max() >= num_items:
            raise TrainingError("Encoded index exceeds the factor table size")

        torch.manual_seed(config.seed)
        model = MatrixFactorization(
            num_users=num_users,
            num_items=num_items,
            rank=config.rank,
            device=config.device,
        )
        device = model.device

        if config.verbose:
            display_model_summary(model)

        logger.info(
            "Training matrix factorization on %d ratings (%d users, %d items, rank %d, %d iterations)",
            len(rows),
            num_users,
            num_items,
            config.rank,
            config.iterations,
        )

        users_tensor = torch.as_tensor(user_idx, device=device)
        items_tensor = torch.as_tensor(item_idx, device=device)
        ratings_tensor = torch.as_tensor(labels, device=device)

        optimizer = torch.optim.Adagrad(model.parameters(), lr=config.learning_rate)
        criterion = RegularizedMSELoss(reg=config.reg)
        generator = torch.Generator().manual_seed(config.seed)

        n_samples = len(rows)
        n_batches = (n_samples + config.batch_size - 1) // config.batch_size
        self.history = []

        model.train()
        pbar = tqdm(
            range(config.iterations),
            desc="Training",
            disable=not config.verbose,
            leave=False,
            ncols=100,
        )

        for iteration in pbar:
            perm = torch.randperm(n_samples, generator=generator).to(device)
            total_loss = 0.0

            for batch_start in range(0, n_samples, config.batch_size):
                batch = perm[batch_start:batch_start + config.batch_size]
                batch_users = users_tensor[batch]
                batch_items = items_tensor[batch]

                optimizer.zero_grad()

                user_emb, item_emb = model.factors(batch_users, batch_items)
                predictions = (user_emb * item_emb).sum(dim=-1)
                loss = criterion(predictions, ratings_tensor[batch], user_emb, item_emb)

                loss.backward()
                optimizer.step()

                total_loss += loss.item()

            avg_loss = total_loss / n_batches
            self.history.append(avg_loss)
            pbar.set_postfix({"loss": f"{avg_loss:.4f}"})
            logger.debug("Iteration %d/%d | Loss: %.4f", iteration + 1, config.iterations, avg_loss)

        model.eval()

        if not np.isfinite(self.history[-1]):
            raise TrainingError(
                f"Training diverged (loss={self.history[-1]}); lower the learning rate"
            )

        logger.info("Final training loss: %.4f", self.history[-1])
        return model


class MeanRatingTrainer:
    """Fits a GlobalMeanModel; useful as a baseline."""

    def fit(
        self,
        rows: pd.DataFrame,
        config: TrainerConfig,
        num_users: Optional[int] = None,
        num_items: Optional[int] = None,
    ) -> GlobalMeanModel:
        config.validate()
        _check_rows(rows)
        return GlobalMeanModel(float(rows["label"].mean()))
