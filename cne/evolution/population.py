"""
Population management.

Handles:
- Initial population creation around a starting iterate
- Fitness evaluation in index order
- Best-candidate lookup
"""

from typing import Callable, List, Optional, Tuple

import numpy as np

from ..exceptions import ShapeMismatchError
from .fitness import evaluate_fitness
from .operators import rank_by_fitness


class Population:
    """
    Fixed-size list of equally shaped candidates plus their fitness values.

    ``fitness[i]`` belongs to ``candidates[i]``. Until the first evaluation
    every fitness is ``inf``.
    """

    def __init__(self, candidates: List[np.ndarray]):
        if not candidates:
            raise ValueError("population needs at least one candidate")

        shape = candidates[0].shape
        for i, candidate in enumerate(candidates):
            if candidate.shape != shape:
                raise ShapeMismatchError(
                    f"candidate {i} has shape {candidate.shape}, expected {shape}"
                )

        self.candidates = candidates
        self.shape: Tuple[int, ...] = shape
        self.fitness = np.full(len(candidates), np.inf)

    def __len__(self) -> int:
        return len(self.candidates)

    def __getitem__(self, index: int) -> np.ndarray:
        return self.candidates[index]

    def evaluate(
        self,
        objective: Callable[[np.ndarray], float],
        on_evaluate: Optional[Callable[[np.ndarray, float], None]] = None,
    ) -> int:
        """
        Evaluate every candidate, one at a time in index order.

        Args:
            objective: Callable returning a candidate's fitness
            on_evaluate: Optional observer called with (candidate, fitness)

        Returns:
            Number of evaluations performed
        """
        for i, candidate in enumerate(self.candidates):
            self.fitness[i] = evaluate_fitness(objective, candidate)
            if on_evaluate:
                on_evaluate(candidate, self.fitness[i])
        return len(self.candidates)

    def ranked_indices(self) -> np.ndarray:
        """Candidate indices, best fitness first."""
        return rank_by_fitness(self.fitness)

    @property
    def best_index(self) -> int:
        return int(self.ranked_indices()[0])

    @property
    def best_fitness(self) -> float:
        return float(self.fitness[self.best_index])

    @property
    def best_candidate(self) -> np.ndarray:
        """Copy of the best candidate."""
        return self.candidates[self.best_index].copy()


def create_initial_population(
    iterate: np.ndarray,
    population_size: int,
    rng: np.random.Generator,
) -> Population:
    """
    Create the starting population around a given point.

    Each candidate is ``iterate`` plus standard normal noise of the same
    shape, drawn candidate by candidate. Candidates keep the dtype of
    ``iterate``.

    Args:
        iterate: Starting point
        population_size: Number of candidates
        rng: Random stream

    Returns:
        Population of ``population_size`` new candidates
    """
    base = np.array(iterate, copy=True)
    candidates = [
        base + rng.standard_normal(base.shape).astype(base.dtype)
        for _ in range(population_size)
    ]
    return Population(candidates)
