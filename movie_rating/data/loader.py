"""
CSV loading for (user, movie, rating) tables.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import numpy as np
import pandas as pd

from ..exceptions import LoadError

logger = logging.getLogger(__name__)

# Column order in the files is fixed: user id, item id, label
RATING_COLUMNS = ["user_id", "item_id", "label"]


@dataclass(frozen=True)
class RatingRecord:
    """One observed (user, item, rating) triple."""

    user_id: float
    item_id: float
    label: float


def load_ratings_frame(path: str | Path, sep: str = ",") -> pd.DataFrame:
    """
    Load a ratings table into a dataframe.

    The first row is a header and is skipped. Columns are taken by position
    (user id, item id, label), so header names such as ``userId,movieId,Label``
    are not required.

    Args:
        path: Path to the delimited text file
        sep: Field separator

    Returns:
        Dataframe with float64 columns ``user_id``, ``item_id``, ``label``

    Raises:
        LoadError: If the file is missing or a row cannot be parsed into
            three numeric fields
    """
    path = Path(path)

    # The header is read as an ordinary row so that the field count is fixed
    # by it and longer data rows fail to tokenize instead of shifting columns.
    try:
        raw = pd.read_csv(
            path,
            sep=sep,
            header=None,
            index_col=False,
            dtype=str,
            skipinitialspace=True,
        )
    except FileNotFoundError as exc:
        raise LoadError(f"Ratings file not found: {path}") from exc
    except pd.errors.EmptyDataError as exc:
        raise LoadError(f"Ratings file is empty: {path}") from exc
    except pd.errors.ParserError as exc:
        raise LoadError(f"Malformed ratings file {path}: {exc}") from exc

    if raw.shape[1] < len(RATING_COLUMNS):
        raise LoadError(
            f"Ratings file {path} has {raw.shape[1]} column(s), "
            f"expected at least {len(RATING_COLUMNS)}"
        )

    raw = raw.iloc[1:, : len(RATING_COLUMNS)].reset_index(drop=True)
    raw.columns = RATING_COLUMNS

    df = pd.DataFrame(
        {col: pd.to_numeric(raw[col], errors="coerce") for col in RATING_COLUMNS}
    ).astype(np.float64)

    bad_rows = df.isna().any(axis=1)
    if bad_rows.any():
        first = int(np.flatnonzero(bad_rows.to_numpy())[0])
        # +2: one for the header, one for 1-based line numbers
        raise LoadError(
            f"Malformed row at line {first + 2} of {path}: "
            f"{raw.iloc[first].tolist()}"
        )

    logger.debug("Loaded %d ratings from %s", len(df), path)
    return df.reset_index(drop=True)


def load_ratings(path: str | Path, sep: str = ",") -> list[RatingRecord]:
    """
    Load a ratings file as a list of records, in file order.

    Raises:
        LoadError: See ``load_ratings_frame``
    """
    return frame_to_records(load_ratings_frame(path, sep=sep))


def frame_to_records(df: pd.DataFrame) -> list[RatingRecord]:
    """Convert a ratings dataframe to records."""
    return [
        RatingRecord(float(row.user_id), float(row.item_id), float(row.label))
        for row in df[RATING_COLUMNS].itertuples(index=False)
    ]


def records_to_frame(records: Iterable[RatingRecord]) -> pd.DataFrame:
    """Convert records to a ratings dataframe."""
    rows = [(r.user_id, r.item_id, r.label) for r in records]
    return pd.DataFrame(rows, columns=RATING_COLUMNS, dtype=np.float64)
