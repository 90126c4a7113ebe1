"""
Data module for rating table loading and encoding.
"""
from .datamodule import DataSplit, RatingDataModule
from .loader import (
    RatingRecord,
    frame_to_records,
    load_ratings,
    load_ratings_frame,
    records_to_frame,
)
from .preprocessor import DataPreprocessor, RatingEncoder

__all__ = [
    "DataSplit",
    "RatingDataModule",
    "RatingRecord",
    "frame_to_records",
    "load_ratings",
    "load_ratings_frame",
    "records_to_frame",
    "DataPreprocessor",
    "RatingEncoder",
]
