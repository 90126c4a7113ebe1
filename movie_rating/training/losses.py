"""
Loss functions for rating regression.
"""
from __future__ import annotations

import torch
import torch.nn as nn
import torch.nn.functional as F


class RegularizedMSELoss(nn.Module):
    """
    Squared error with L2 penalty on the latent factors.

    L = mean((pred - rating)^2) + reg * mean(||u||^2 + ||v||^2)

    Only the factors touched by the batch are penalised.
    """

    def __init__(self, reg: float = 0.1):
        """
        Initialize loss.

        Args:
            reg: L2 regularization weight
        """
        super().__init__()
        self.reg = reg

    def forward(
        self,
        predictions: torch.Tensor,
        ratings: torch.Tensor,
        user_emb: torch.Tensor,
        item_emb: torch.Tensor,
    ) -> torch.Tensor:
        """
        Compute loss.

        Args:
            predictions: Predicted ratings (batch_size,)
            ratings: Observed ratings (batch_size,)
            user_emb: User factors of the batch (batch_size, rank)
            item_emb: Item factors of the batch (batch_size, rank)

        Returns:
            Scalar loss
        """
        mse = F.mse_loss(predictions, ratings)

        if self.reg == 0:
            return mse

        l2 = (user_emb.pow(2).sum(dim=1) + item_emb.pow(2).sum(dim=1)).mean()
        return mse + self.reg * l2
