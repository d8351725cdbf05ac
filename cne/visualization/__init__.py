"""Plotting helpers for optimization runs."""

from .plots import plot_fitness_history, save_figure

__all__ = [
    'plot_fitness_history',
    'save_figure',
]
