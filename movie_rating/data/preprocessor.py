"""
Identifier encoding for rating data.

Raw user / movie identifiers are mapped to dense, contiguous indices that can
address rows of a latent factor table.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
import pandas as pd
from sklearn.preprocessing import LabelEncoder

from ..exceptions import EncodingError

logger = logging.getLogger(__name__)


def _as_ids(ids, kind: str) -> np.ndarray:
    """Coerce raw identifiers to a float64 array."""
    try:
        return np.asarray(ids, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Non-numeric {kind} id(s): {exc}") from exc


@dataclass
class RatingEncoder:
    """Wrapper for user/item label encoders."""

    user_encoder: LabelEncoder = field(default_factory=LabelEncoder)
    item_encoder: LabelEncoder = field(default_factory=LabelEncoder)
    _fitted: bool = False

    @property
    def is_fitted(self) -> bool:
        return self._fitted

    @property
    def num_users(self) -> int:
        self._check_fitted()
        return len(self.user_encoder.classes_)

    @property
    def num_items(self) -> int:
        self._check_fitted()
        return len(self.item_encoder.classes_)

    def _check_fitted(self) -> None:
        if not self._fitted:
            raise EncodingError("Encoders not fitted. Call fit() first.")

    def fit(self, user_ids: np.ndarray, item_ids: np.ndarray) -> "RatingEncoder":
        """Fit encoders on user and item IDs."""
        self.user_encoder.fit(_as_ids(user_ids, "user"))
        self.item_encoder.fit(_as_ids(item_ids, "item"))
        self._fitted = True
        return self

    def transform_users(self, user_ids: np.ndarray) -> np.ndarray:
        """Transform user IDs to encoded indices."""
        return self._transform(self.user_encoder, user_ids, "user")

    def transform_items(self, item_ids: np.ndarray) -> np.ndarray:
        """Transform item IDs to encoded indices."""
        return self._transform(self.item_encoder, item_ids, "item")

    def inverse_transform_users(self, encoded_ids: np.ndarray) -> np.ndarray:
        """Transform encoded indices back to original user IDs."""
        return self._inverse(self.user_encoder, encoded_ids, "user")

    def inverse_transform_items(self, encoded_ids: np.ndarray) -> np.ndarray:
        """Transform encoded indices back to original item IDs."""
        return self._inverse(self.item_encoder, encoded_ids, "item")

    def encode_user(self, user_id: float) -> int:
        return int(self.transform_users(np.array([user_id]))[0])

    def encode_item(self, item_id: float) -> int:
        return int(self.transform_items(np.array([item_id]))[0])

    def known_users(self, user_ids: np.ndarray) -> np.ndarray:
        """Boolean mask of user IDs seen during fitting."""
        self._check_fitted()
        return np.isin(_as_ids(user_ids, "user"), self.user_encoder.classes_)

    def known_items(self, item_ids: np.ndarray) -> np.ndarray:
        """Boolean mask of item IDs seen during fitting."""
        self._check_fitted()
        return np.isin(_as_ids(item_ids, "item"), self.item_encoder.classes_)

    def _transform(self, encoder: LabelEncoder, ids: np.ndarray, kind: str) -> np.ndarray:
        self._check_fitted()
        values = _as_ids(ids, kind)

        unseen = np.setdiff1d(values, encoder.classes_)
        if len(unseen) > 0:
            raise EncodingError(
                f"Unknown {kind} id(s) not seen during training: {unseen.tolist()}"
            )

        return encoder.transform(values).astype(np.int64)

    def _inverse(self, encoder: LabelEncoder, encoded_ids: np.ndarray, kind: str) -> np.ndarray:
        self._check_fitted()
        try:
            return encoder.inverse_transform(np.asarray(encoded_ids, dtype=np.int64))
        except ValueError as exc:
            raise EncodingError(f"Invalid encoded {kind} index: {exc}") from exc


class DataPreprocessor:
    """Adds encoded index columns to ratings dataframes."""

    def __init__(
        self,
        user_col: str = "user_id",
        item_col: str = "item_id",
    ):
        self.user_col = user_col
        self.item_col = item_col
        self.encoders = RatingEncoder()

    def fit_transform(self, ratings_df: pd.DataFrame) -> pd.DataFrame:
        """
        Fit the encoders on a ratings dataframe and encode it.

        Args:
            ratings_df: Ratings with raw user / item id columns

        Returns:
            Copy of the dataframe with ``user_idx`` and ``item_idx`` columns
        """
        self._check_ids(ratings_df)
        self.encoders.fit(
            ratings_df[self.user_col].to_numpy(),
            ratings_df[self.item_col].to_numpy(),
        )
        return self.transform(ratings_df)

    def transform(self, ratings_df: pd.DataFrame, drop_unknown: bool = False) -> pd.DataFrame:
        """
        Encode a dataframe with already fitted encoders.

        Args:
            ratings_df: Ratings with raw user / item id columns
            drop_unknown: Drop rows with ids unseen during fitting instead of
                raising

        Returns:
            Copy of the dataframe with ``user_idx`` and ``item_idx`` columns

        Raises:
            EncodingError: On null ids, or unseen ids when ``drop_unknown``
                is False
        """
        self._check_ids(ratings_df)
        df = ratings_df.copy()

        if drop_unknown:
            known = (
                self.encoders.known_users(df[self.user_col].to_numpy())
                & self.encoders.known_items(df[self.item_col].to_numpy())
            )
            dropped = int((~known).sum())
            if dropped:
                logger.warning(
                    "Dropping %d of %d rows with ids not seen during training",
                    dropped,
                    len(df),
                )
            df = df[known]

        df["user_idx"] = self.encoders.transform_users(df[self.user_col].to_numpy())
        df["item_idx"] = self.encoders.transform_items(df[self.item_col].to_numpy())

        return df.reset_index(drop=True)

    def _check_ids(self, ratings_df: pd.DataFrame) -> None:
        for col in (self.user_col, self.item_col):
            if col not in ratings_df.columns:
                raise EncodingError(f"Missing identifier column: {col}")
            if ratings_df[col].isna().any():
                raise EncodingError(f"Null values in identifier column: {col}")

    @property
    def num_users(self) -> int:
        return self.encoders.num_users

    @property
    def num_items(self) -> int:
        return self.encoders.num_items
