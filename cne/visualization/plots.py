"""
Matplotlib plots of optimization progress.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

# Matplotlib imports with non-GUI backend
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from ..evolution.history import EvolutionHistory


def plot_fitness_history(
    history: EvolutionHistory,
    log_scale: bool = True,
    show_mean: bool = True,
    title: Optional[str] = None,
    figsize: Tuple[int, int] = (8, 4),
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """
    Plot best (and mean) fitness per generation.

    Args:
        history: History of a finished or running optimization
        log_scale: Use a log y-axis (only applied when all values are positive)
        show_mean: Also draw the population mean fitness
        title: Plot title
        figsize: Figure size
        ax: Existing axes to plot on

    Returns:
        matplotlib Figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    generations = [g.generation for g in history.generations]
    best = np.asarray(history.fitness_trajectory, dtype=float)

    ax.plot(generations, best, 'b-', linewidth=2, label='Best')
    if show_mean:
        mean = np.asarray(history.mean_trajectory, dtype=float)
        ax.plot(generations, mean, color='gray', linewidth=1, alpha=0.7, label='Mean')
        values = np.concatenate([best, mean])
    else:
        values = best

    if log_scale and values.size and np.all(values[np.isfinite(values)] > 0):
        ax.set_yscale('log')

    ax.set_xlabel('Generation')
    ax.set_ylabel('Fitness')
    ax.set_title(title or 'Fitness by Generation')
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.tight_layout()
    return fig


def save_figure(fig: plt.Figure, path: Union[str, Path], dpi: int = 100) -> Path:
    """Write a figure to disk as PNG and close it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)
    return path
