"""
Base rating model interface shared by all fitted models.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
import torch


def resolve_device(device: Optional[str] = None) -> torch.device:
    """Resolve a device name, auto-detecting when None or 'auto'."""
    if device is None or device == "auto":
        if torch.cuda.is_available():
            return torch.device("cuda")
        elif torch.backends.mps.is_available():
            return torch.device("mps")
        return torch.device("cpu")
    return torch.device(device)


class RatingModel(ABC):
    """
    Abstract base class for fitted rating models.

    A model maps an encoded (user index, item index) pair to a predicted
    rating. Models are read-only once fitted.
    """

    @abstractmethod
    def predict(self, user_idx: int, item_idx: int) -> float:
        """
        Predict the rating of one encoded user / item pair.

        Args:
            user_idx: Encoded user index
            item_idx: Encoded item index

        Returns:
            Predicted rating
        """
        pass

    def predict_batch(self, user_idx: np.ndarray, item_idx: np.ndarray) -> np.ndarray:
        """
        Predict ratings for aligned arrays of encoded indices.

        Subclasses with a vectorized path should override this.
        """
        return np.array(
            [self.predict(int(u), int(i)) for u, i in zip(user_idx, item_idx)],
            dtype=np.float64,
        )
