"""
Per-generation statistics for an optimization run.

Kept in memory only; ``to_dict``/``from_dict`` produce plain structures for
callers that want to store or plot them.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import List, Dict, Any

import numpy as np


@dataclass
class GenerationStats:
    """Statistics for a single generation."""
    generation: int
    best_fitness: float
    mean_fitness: float
    worst_fitness: float
    std_fitness: float
    population_size: int
    num_elite: int
    crossovers: int
    mutated_entries: int
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class EvolutionHistory:
    """
    Tracks optimization progress over generations.

    Records per-generation statistics for analysis and visualization.
    """

    def __init__(self):
        self.generations: List[GenerationStats] = []
        self.fitness_trajectory: List[float] = []

    def __len__(self) -> int:
        return len(self.generations)

    def record_generation(
        self,
        generation: int,
        fitness: np.ndarray,
        num_elite: int,
        crossovers: int = 0,
        mutated_entries: int = 0,
    ) -> GenerationStats:
        """
        Record statistics for an evaluated generation.

        Args:
            generation: Generation number
            fitness: Fitness of every candidate in the generation
            num_elite: Elite size used for reproduction
            crossovers: Crossover pairs produced after this evaluation
            mutated_entries: Entries mutated after this evaluation

        Returns:
            GenerationStats for this generation
        """
        stats = GenerationStats(
            generation=generation,
            best_fitness=float(np.min(fitness)),
            mean_fitness=float(np.mean(fitness)),
            worst_fitness=float(np.max(fitness)),
            std_fitness=float(np.std(fitness)),
            population_size=len(fitness),
            num_elite=num_elite,
            crossovers=crossovers,
            mutated_entries=mutated_entries,
            timestamp=datetime.now().isoformat(),
        )
        self.generations.append(stats)
        self.fitness_trajectory.append(stats.best_fitness)
        return stats

    @property
    def mean_trajectory(self) -> List[float]:
        return [g.mean_fitness for g in self.generations]

    def improvement(self) -> float:
        """Drop in best fitness from the first to the last generation."""
        if len(self.fitness_trajectory) < 2:
            return 0.0
        return self.fitness_trajectory[0] - self.fitness_trajectory[-1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'generations': [g.to_dict() for g in self.generations],
            'fitness_trajectory': list(self.fitness_trajectory),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EvolutionHistory':
        history = cls()
        history.generations = [GenerationStats(**g) for g in data.get('generations', [])]
        history.fitness_trajectory = list(data.get('fitness_trajectory', []))
        return history
