from __future__ import annotations

import pytest

from movie_rating.data.loader import (
    RatingRecord,
    frame_to_records,
    load_ratings,
    load_ratings_frame,
    records_to_frame,
)
from movie_rating.exceptions import LoadError


def test_load_ratings_keeps_count_and_file_order(write_csv) -> None:
    rows = [(3, 10, 4.0), (1, 2, 3.5), (2, 10, 1.0), (3, 7, 5.0)]
    path = write_csv("train.csv", rows)

    records = load_ratings(path)

    assert len(records) == len(rows)
    assert records == [RatingRecord(float(u), float(i), float(r)) for u, i, r in rows]


def test_header_names_are_not_required(write_csv) -> None:
    path = write_csv("train.csv", [(1, 1, 5.0)], header="a,b,c")
    assert load_ratings(path) == [RatingRecord(1.0, 1.0, 5.0)]


def test_extra_columns_are_ignored(write_csv) -> None:
    path = write_csv("train.csv", [(1, 1, 5.0, 964982703)], header="userId,movieId,Label,timestamp")
    df = load_ratings_frame(path)
    assert list(df.columns) == ["user_id", "item_id", "label"]
    assert df.iloc[0].tolist() == [1.0, 1.0, 5.0]


def test_header_only_file_yields_no_records(write_csv) -> None:
    path = write_csv("train.csv", [])
    assert load_ratings(path) == []


def test_missing_file_raises_load_error(tmp_path) -> None:
    with pytest.raises(LoadError, match="not found"):
        load_ratings(tmp_path / "missing.csv")


def test_empty_file_raises_load_error(tmp_path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(LoadError):
        load_ratings(path)


def test_non_numeric_field_raises_load_error(write_csv) -> None:
    path = write_csv("train.csv", [(1, 1, 5.0), (2, "abc", 3.0), (3, 3, 1.0)])
    with pytest.raises(LoadError, match="line 3"):
        load_ratings(path)


def test_missing_field_raises_load_error(tmp_path) -> None:
    path = tmp_path / "train.csv"
    path.write_text("userId,movieId,Label\n1,1,5.0\n2,3\n")
    with pytest.raises(LoadError):
        load_ratings(path)


def test_too_many_fields_raises_load_error(tmp_path) -> None:
    path = tmp_path / "train.csv"
    path.write_text("userId,movieId,Label\n1,1,5.0\n2,3,4.0,9\n")
    with pytest.raises(LoadError):
        load_ratings(path)


def test_too_few_columns_raises_load_error(write_csv) -> None:
    path = write_csv("train.csv", [(1, 1)], header="userId,movieId")
    with pytest.raises(LoadError, match="column"):
        load_ratings(path)


def test_records_frame_conversion() -> None:
    records = [RatingRecord(1.0, 2.0, 3.0), RatingRecord(4.0, 5.0, 6.0)]
    df = records_to_frame(records)
    assert list(df.columns) == ["user_id", "item_id", "label"]
    assert frame_to_records(df) == records


def test_every_row_longer_than_header_raises_load_error(tmp_path) -> None:
    path = tmp_path / "train.csv"
    path.write_text("userId,movieId,Label\n1,10,5.0,964982703\n2,20,3.0,964982704\n")
    with pytest.raises(LoadError):
        load_ratings(path)


def test_columns_are_not_shifted(tmp_path) -> None:
    path = tmp_path / "train.csv"
    path.write_text("userId,movieId,Label,timestamp\n1,10,5.0,964982703\n2,20,3.0,964982704\n")
    assert load_ratings(path) == [RatingRecord(1.0, 10.0, 5.0), RatingRecord(2.0, 20.0, 3.0)]
