"""
Split a MovieLens ratings.csv into the train/test files used by training.
"""
import argparse
import sys
from pathlib import Path

import pandas as pd
from sklearn.model_selection import train_test_split


def split_ratings(
    ratings_path: Path,
    output_dir: Path,
    test_size: float = 0.2,
    seed: int = 42,
) -> None:
    """Write recommendation-ratings-{train,test}.csv with userId,movieId,Label."""
    if not ratings_path.exists():
        print(f"❌ Error: {ratings_path} does not exist")
        sys.exit(1)

    print(f"Reading {ratings_path}...")
    ratings = pd.read_csv(ratings_path, usecols=["userId", "movieId", "rating"])
    ratings = ratings.rename(columns={"rating": "Label"})

    train, test = train_test_split(ratings, test_size=test_size, random_state=seed)

    output_dir.mkdir(parents=True, exist_ok=True)
    train.to_csv(output_dir / "recommendation-ratings-train.csv", index=False)
    test.to_csv(output_dir / "recommendation-ratings-test.csv", index=False)

    print(f"✓ Train: {len(train):,} rows")
    print(f"✓ Test: {len(test):,} rows")
    print(f"📊 Users: {ratings['userId'].nunique():,}, Movies: {ratings['movieId'].nunique():,}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("ratings", type=Path, help="MovieLens ratings.csv")
    parser.add_argument("--output-dir", type=Path, default=Path("Data"))
    parser.add_argument("--test-size", type=float, default=0.2)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    split_ratings(args.ratings, args.output_dir, args.test_size, args.seed)


if __name__ == "__main__":
    main()
