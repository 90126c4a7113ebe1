"""
Rating DataModule: loads the train / test files and encodes them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pandas as pd

from .loader import load_ratings_frame
from .preprocessor import DataPreprocessor, RatingEncoder

logger = logging.getLogger(__name__)


@dataclass
class DataSplit:
    """Container for the encoded train/test data."""

    train_df: pd.DataFrame
    test_df: pd.DataFrame


class RatingDataModule:
    """
    DataModule for rating tables.

    Handles:
    - Loading the train and test CSV files
    - Fitting the id encoders on the training set
    - Encoding both splits
    """

    def __init__(
        self,
        train_path: str | Path,
        test_path: str | Path,
        sep: str = ",",
    ):
        """
        Initialize the DataModule.

        Args:
            train_path: Path to the training ratings file
            test_path: Path to the held-out ratings file
            sep: Field separator of both files
        """
        self.train_path = Path(train_path)
        self.test_path = Path(test_path)
        self.sep = sep

        self.preprocessor = DataPreprocessor()
        self.data_split: Optional[DataSplit] = None

    def setup(self) -> None:
        """Load and encode both splits."""
        train_raw = load_ratings_frame(self.train_path, sep=self.sep)
        test_raw = load_ratings_frame(self.test_path, sep=self.sep)

        train_df = self.preprocessor.fit_transform(train_raw)
        # Test rows with ids unseen in training cannot be scored
        test_df = self.preprocessor.transform(test_raw, drop_unknown=True)

        self.data_split = DataSplit(train_df=train_df, test_df=test_df)

        logger.info(
            "Loaded %d training and %d test ratings (%d users, %d items)",
            len(train_df),
            len(test_df),
            self.num_users,
            self.num_items,
        )

    def _require_setup(self) -> DataSplit:
        if self.data_split is None:
            raise RuntimeError("DataModule not set up. Call setup() first.")
        return self.data_split

    @property
    def train_df(self) -> pd.DataFrame:
        return self._require_setup().train_df

    @property
    def test_df(self) -> pd.DataFrame:
        return self._require_setup().test_df

    @property
    def encoders(self) -> RatingEncoder:
        return self.preprocessor.encoders

    @property
    def num_users(self) -> int:
        return self.preprocessor.num_users

    @property
    def num_items(self) -> int:
        return self.preprocessor.num_items
