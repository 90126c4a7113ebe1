"""Utility modules."""
from .rich_logging import (
    console,
    display_config,
    display_metrics_table,
    display_model_summary,
    setup_logging,
)

__all__ = [
    "console",
    "display_config",
    "display_metrics_table",
    "display_model_summary",
    "setup_logging",
]
