"""
Single-pair inference: predicts a rating for raw user / movie ids and turns it
into a recommend / do-not-recommend decision.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from ..data.preprocessor import RatingEncoder
from ..models import RatingModel

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 3.5


@dataclass(frozen=True)
class RatingPrediction:
    """Predicted score for one (user, item) pair."""

    user_id: float
    item_id: float
    score: float
    recommended: bool

    def describe(self) -> str:
        verdict = "is recommended" if self.recommended else "is not recommended"
        return f"Movie {_format_id(self.item_id)} {verdict} for user {_format_id(self.user_id)}"


def _format_id(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def is_recommended(score: float, threshold: float = DEFAULT_THRESHOLD) -> bool:
    """Score rounded to one decimal must be strictly above the threshold."""
    return round(score, 1) > threshold


class RatingPredictor:
    """
    Predicts ratings for raw identifiers.

    Identifiers are resolved through the encoder fitted on the training set;
    ids never seen in training raise EncodingError.
    """

    def __init__(
        self,
        model: RatingModel,
        encoders: RatingEncoder,
        threshold: float = DEFAULT_THRESHOLD,
    ):
        """
        Initialize predictor.

        Args:
            model: Fitted rating model
            encoders: Encoders fitted on the training set
            threshold: Minimum rounded score for a recommendation (exclusive)
        """
        self.model = model
        self.encoders = encoders
        self.threshold = threshold

    def predict(self, user_id: float, item_id: float) -> RatingPrediction:
        """
        Predict the rating of one raw (user, item) pair.

        Raises:
            EncodingError: If either id was not seen during training
        """
        user_idx = self.encoders.encode_user(user_id)
        item_idx = self.encoders.encode_item(item_id)

        score = float(self.model.predict(user_idx, item_idx))
        logger.debug("Score for user %s, item %s: %.4f", user_id, item_id, score)

        return RatingPrediction(
            user_id=float(user_id),
            item_id=float(item_id),
            score=score,
            recommended=is_recommended(score, self.threshold),
        )
