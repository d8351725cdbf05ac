"""
Observer hooks for optimization runs.

Callbacks are notified at the start and end of a run, after every fitness
evaluation, and at the end of every generation. They only observe: return
values are ignored and the optimizer state must not be modified.
"""

from typing import Any, Callable, Dict, Optional

import numpy as np

from .history import EvolutionHistory, GenerationStats


class Callback:
    """Base class with no-op hooks; override the ones you need."""

    def on_optimization_begin(self, optimizer, iterate: np.ndarray) -> None:
        pass

    def on_evaluate(self, optimizer, candidate: np.ndarray, fitness: float) -> None:
        pass

    def on_generation_end(self, optimizer, generation: int, stats: GenerationStats) -> None:
        pass

    def on_optimization_end(self, optimizer, iterate: np.ndarray, fitness: float) -> None:
        pass


class ProgressCallback(Callback):
    """
    Adapts a ``progress_callback(generation, max_generations, stats)`` function.

    ``stats`` is the generation's ``GenerationStats`` as a dict.
    """

    def __init__(self, fn: Callable[[int, Optional[int], Dict[str, Any]], None]):
        self.fn = fn

    def on_generation_end(self, optimizer, generation: int, stats: GenerationStats) -> None:
        self.fn(generation, optimizer.max_generations, stats.to_dict())


class HistoryCallback(Callback):
    """Collects generation statistics into its own EvolutionHistory."""

    def __init__(self):
        self.history = EvolutionHistory()
        self.evaluations = 0

    def on_evaluate(self, optimizer, candidate: np.ndarray, fitness: float) -> None:
        self.evaluations += 1

    def on_generation_end(self, optimizer, generation: int, stats: GenerationStats) -> None:
        self.history.generations.append(stats)
        self.history.fitness_trajectory.append(stats.best_fitness)
