"""
Rich console logging utilities for the rating pipeline.

Provides terminal output with:
- Rich-formatted log records
- Configuration panels
- Metric tables
- Model summaries
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table


# Global console instance
console = Console()


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure Rich logging handler.

    Args:
        level: Logging level

    Returns:
        Configured package logger
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                show_time=True,
                show_path=False,
            )
        ],
        force=True,
    )
    return logging.getLogger("movie_rating")


def _config_lines(config: dict[str, Any], depth: int = 0) -> list[str]:
    indent = "  " * depth
    style = "cyan" if depth == 0 else "dim"
    lines = []

    for key, value in config.items():
        if isinstance(value, dict):
            lines.append(f"{indent}[{style}]{key}[/{style}]:")
            lines.extend(_config_lines(value, depth + 1))
        else:
            lines.append(f"{indent}[{style}]{key}[/{style}]: {escape(str(value))}")

    return lines


def display_config(config: dict[str, Any], title: str = "Run Configuration") -> None:
    """
    Display a (possibly nested) configuration in a Rich panel.

    Nested groups are indented one level per depth.

    Args:
        config: Configuration dictionary, e.g. from ``OmegaConf.to_container``
        title: Panel title
    """
    console.print(Panel("\n".join(_config_lines(config)), title=title, border_style="blue"))
    console.print()


def display_metrics_table(
    metrics: dict[str, float],
    title: Optional[str] = None,
) -> None:
    """
    Display metrics in a Rich table.

    Args:
        metrics: Mapping of metric name to value
        title: Table title (default: "Evaluation Results")
    """
    table = Table(title=title or "Evaluation Results", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="green", justify="right")

    for key, value in metrics.items():
        if isinstance(value, float):
            table.add_row(key, f"{value:.4f}")
        else:
            table.add_row(key, str(value))

    console.print(table)
    console.print()


def display_model_summary(model, title: str = "Model Summary") -> None:
    """
    Display a short model summary.

    Args:
        model: Fitted or freshly built rating model
        title: Panel title
    """
    lines = [f"[cyan]Model[/cyan]: {model.__class__.__name__}"]

    if hasattr(model, "parameters"):
        lines.append(f"[cyan]Parameters[/cyan]: {sum(p.numel() for p in model.parameters()):,}")
    if hasattr(model, "num_users"):
        lines.append(f"[cyan]Users[/cyan]: {model.num_users:,}")
    if hasattr(model, "num_items"):
        lines.append(f"[cyan]Items[/cyan]: {model.num_items:,}")
    if hasattr(model, "rank"):
        lines.append(f"[cyan]Rank[/cyan]: {model.rank}")

    console.print(Panel("\n".join(lines), title=title, border_style="green"))
    console.print()
