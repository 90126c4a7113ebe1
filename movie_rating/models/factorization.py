"""
Matrix factorization rating model using PyTorch.

Each user and each item gets a latent vector of width ``rank``; the predicted
rating of a pair is the dot product of the two vectors.
"""
from __future__ import annotations

import math
from typing import Optional

import numpy as np
import torch
import torch.nn as nn

from ..exceptions import EncodingError
from .base import RatingModel, resolve_device


class MatrixFactorization(RatingModel, nn.Module):
    """
    Latent factor model for explicit ratings.

    Factors are initialised uniformly in ``[0, 1/sqrt(rank))`` so that the
    initial dot products are small and non-negative.
    """

    def __init__(
        self,
        num_users: int,
        num_items: int,
        rank: int = 100,
        device: Optional[str] = "cpu",
    ):
        """
        Initialize the factor tables.

        Args:
            num_users: Number of encoded users
            num_items: Number of encoded items
            rank: Number of latent factors
            device: Device (cpu/cuda/mps/auto)
        """
        super().__init__()

        self.num_users = num_users
        self.num_items = num_items
        self.rank = rank
        self._device = resolve_device(device)

        self.user_factors = nn.Embedding(num_users, rank)
        self.item_factors = nn.Embedding(num_items, rank)

        self._init_weights()
        self.to(self._device)

    @property
    def device(self) -> torch.device:
        return self._device

    def _init_weights(self) -> None:
        bound = 1.0 / math.sqrt(self.rank)
        nn.init.uniform_(self.user_factors.weight, 0.0, bound)
        nn.init.uniform_(self.item_factors.weight, 0.0, bound)

    def forward(self, users: torch.Tensor, items: torch.Tensor) -> torch.Tensor:
        """
        Compute predicted ratings.

        Args:
            users: User indices (batch_size,)
            items: Item indices (batch_size,)

        Returns:
            Predicted ratings (batch_size,)
        """
        user_emb = self.user_factors(users)
        item_emb = self.item_factors(items)
        return (user_emb * item_emb).sum(dim=-1)

    def factors(self, users: torch.Tensor, items: torch.Tensor) -> tuple[torch.Tensor, torch.Tensor]:
        """Latent vectors of a batch of users and items."""
        return self.user_factors(users), self.item_factors(items)

    def _check_indices(self, user_idx: np.ndarray, item_idx: np.ndarray) -> None:
        if len(user_idx) != len(item_idx):
            raise ValueError(
                f"Index arrays differ in length: {len(user_idx)} != {len(item_idx)}"
            )
        if len(user_idx) == 0:
            return
        if user_idx.min() < 0 or user_idx.max() >= self.num_users:
            raise EncodingError(f"User index out of range [0, {self.num_users})")
        if item_idx.min() < 0 or item_idx.max() >= self.num_items:
            raise EncodingError(f"Item index out of range [0, {self.num_items})")

    @torch.no_grad()
    def predict_batch(self, user_idx: np.ndarray, item_idx: np.ndarray) -> np.ndarray:
        user_idx = np.asarray(user_idx, dtype=np.int64)
        item_idx = np.asarray(item_idx, dtype=np.int64)
        self._check_indices(user_idx, item_idx)

        self.eval()
        users = torch.as_tensor(user_idx, device=self.device)
        items = torch.as_tensor(item_idx, device=self.device)
        return self.forward(users, items).cpu().numpy().astype(np.float64)

    def predict(self, user_idx: int, item_idx: int) -> float:
        """Predict the rating of a single encoded pair."""
        return float(self.predict_batch(np.array([user_idx]), np.array([item_idx]))[0])

    def __repr__(self) -> str:
        return (
            f"MatrixFactorization(num_users={self.num_users}, "
            f"num_items={self.num_items}, rank={self.rank}, device={self.device})"
        )
