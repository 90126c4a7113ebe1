"""
Main training script with Hydra configuration.
"""
from __future__ import annotations

import sys

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf

from movie_rating.evaluation import RegressionEvaluator
from movie_rating.exceptions import MovieRatingError
from movie_rating.pipeline import run_pipeline
from movie_rating.training import TrainerConfig
from movie_rating.utils.rich_logging import console, display_config, setup_logging


def build_trainer_config(cfg: DictConfig) -> TrainerConfig:
    """Build the trainer config from the Hydra ``trainer`` group."""
    return TrainerConfig(
        rank=cfg.trainer.rank,
        iterations=cfg.trainer.iterations,
        learning_rate=cfg.trainer.learning_rate,
        reg=cfg.trainer.reg,
        batch_size=cfg.trainer.batch_size,
        seed=cfg.seed,
        device=cfg.device,
        verbose=cfg.trainer.get("verbose", True),
    )


@hydra.main(version_base=None, config_path="../configs", config_name="config")
def main(cfg: DictConfig) -> None:
    """
    Train, evaluate and run one example prediction.

    Args:
        cfg: Hydra configuration
    """
    logger = setup_logging(cfg.log_level)

    console.rule("[bold]Movie Rating Training[/bold]")
    display_config(OmegaConf.to_container(cfg, resolve=True))

    try:
        result = run_pipeline(
            train_path=to_absolute_path(cfg.paths.train_file),
            test_path=to_absolute_path(cfg.paths.test_file),
            trainer_config=build_trainer_config(cfg),
            query_user=cfg.prediction.user_id,
            query_item=cfg.prediction.item_id,
            threshold=cfg.prediction.threshold,
        )
    except MovieRatingError as exc:
        logger.error("An error occurred => %s", exc)
        sys.exit(1)

    console.rule("[bold]Evaluating the model[/bold]")
    RegressionEvaluator().print_results(result.metrics)

    console.rule("[bold]Making a prediction[/bold]")
    console.print(f"[cyan]Score:[/cyan] {result.prediction.score:.4f}")
    console.print(result.prediction.describe())


if __name__ == "__main__":
    main()
