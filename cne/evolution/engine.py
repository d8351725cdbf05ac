"""
Conventional Neural Evolution (CNE) optimizer.

Orchestrates the generation loop:
1. Initialize a population around the starting iterate
2. Evaluate fitness of every candidate
3. Check the termination criteria
4. Rank candidates and keep the elite
5. Refill the other slots by crossover of elite parents
6. Mutate the whole population
7. Repeat from 2

The best candidate of the last evaluated generation is copied into the
caller's iterate and its fitness is returned.
"""

import dataclasses
import numbers
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Sequence
import time

import numpy as np
from loguru import logger

from ..core.random import SeedLike, make_rng
from ..exceptions import ConfigurationError
from .callbacks import Callback
from .fitness import Objective, as_objective
from .history import EvolutionHistory
from .operators import compute_num_elite, reproduce
from .population import create_initial_population
from .termination import TerminationChecker, TerminationReason


@dataclass
class CNEConfig:
    """Configuration for a CNE optimizer."""
    # Population parameters
    population_size: int = 500
    max_generations: Optional[int] = 5000

    # Evolution rates
    mutation_prob: float = 0.1
    mutation_size: float = 0.02
    select_percent: float = 0.2

    # Termination; negative disables both tolerance criteria
    tolerance: float = 1e-5

    @property
    def num_elite(self) -> int:
        return compute_num_elite(self.population_size, self.select_percent)

    def validate(self) -> None:
        """Raise ConfigurationError if any option has the wrong type or is out of range."""
        if not isinstance(self.population_size, numbers.Integral):
            raise ConfigurationError(
                f"population_size must be an integer, got {self.population_size!r}"
            )
        if self.max_generations is not None and not isinstance(
            self.max_generations, numbers.Integral
        ):
            raise ConfigurationError(
                f"max_generations must be an integer or None, got {self.max_generations!r}"
            )
        if self.population_size < 4:
            raise ConfigurationError(
                f"population_size must be at least 4, got {self.population_size}"
            )
        if self.max_generations is not None and self.max_generations < 0:
            raise ConfigurationError(
                f"max_generations must be non-negative or None, got {self.max_generations}"
            )
        if not 0.0 <= self.mutation_prob <= 1.0:
            raise ConfigurationError(
                f"mutation_prob must be in [0, 1], got {self.mutation_prob}"
            )
        if self.mutation_size < 0:
            raise ConfigurationError(
                f"mutation_size must be non-negative, got {self.mutation_size}"
            )
        if not 0.0 <= self.select_percent <= 1.0:
            raise ConfigurationError(
                f"select_percent must be in [0, 1], got {self.select_percent}"
            )

    def replace(self, **changes) -> 'CNEConfig':
        """Return a copy with some options changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CNEConfig':
        return cls(**data)


@dataclass
class EvolutionResult:
    """Results from a CNE run."""
    best_fitness: float
    best_candidate: np.ndarray
    initial_best_fitness: float
    generations_completed: int
    total_evaluations: int
    termination_reason: TerminationReason
    history: EvolutionHistory
    runtime_seconds: float

    def summary(self) -> str:
        """Generate summary string."""
        lines = [
            f"Generations: {self.generations_completed}",
            f"Total evaluations: {self.total_evaluations}",
            f"Initial best fitness: {self.initial_best_fitness:.6g}",
            f"Best fitness: {self.best_fitness:.6g}",
            f"Stopped by: {self.termination_reason.value}",
            f"Runtime: {self.runtime_seconds:.1f}s",
        ]
        return '\n'.join(lines)


class CNE:
    """
    Conventional Neural Evolution optimizer.

    Minimizes an arbitrary objective over a fixed-shape parameter array by
    evolving a population of candidates. The configuration may be changed
    between runs; every run gets its own population, random stream and
    termination state.

    Example:
        optimizer = CNE(CNEConfig(population_size=50, max_generations=200), seed=0)
        weights = np.zeros((2, 1))
        best = optimizer.optimize(lambda w: float(np.sum(w ** 2)), weights)
    """

    def __init__(self, config: Optional[CNEConfig] = None, seed: SeedLike = None):
        """
        Args:
            config: Optimizer configuration (defaults if None)
            seed: Seed used to build a fresh random stream for every run
                that is not given an explicit ``rng``
        """
        self.config = config or CNEConfig()
        self.seed = seed

    # Accessors mirroring the configuration options
    @property
    def population_size(self) -> int:
        return self.config.population_size

    @population_size.setter
    def population_size(self, value: int) -> None:
        self.config.population_size = value

    @property
    def max_generations(self) -> Optional[int]:
        return self.config.max_generations

    @max_generations.setter
    def max_generations(self, value: Optional[int]) -> None:
        self.config.max_generations = value

    @property
    def mutation_prob(self) -> float:
        return self.config.mutation_prob

    @mutation_prob.setter
    def mutation_prob(self, value: float) -> None:
        self.config.mutation_prob = value

    @property
    def mutation_size(self) -> float:
        return self.config.mutation_size

    @mutation_size.setter
    def mutation_size(self, value: float) -> None:
        self.config.mutation_size = value

    @property
    def select_percent(self) -> float:
        return self.config.select_percent

    @select_percent.setter
    def select_percent(self, value: float) -> None:
        self.config.select_percent = value

    @property
    def tolerance(self) -> float:
        return self.config.tolerance

    @tolerance.setter
    def tolerance(self, value: float) -> None:
        self.config.tolerance = value

    def optimize(
        self,
        function: Objective,
        iterate: np.ndarray,
        callbacks: Optional[Sequence[Callback]] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> float:
        """
        Minimize ``function`` starting from ``iterate``.

        Args:
            function: Callable or object with ``evaluate(candidate)``
            iterate: Starting point; overwritten with the best candidate
            callbacks: Optional observers
            rng: Random stream (built from ``seed`` if None)

        Returns:
            Fitness of the best candidate
        """
        return self.run(function, iterate, callbacks=callbacks, rng=rng).best_fitness

    def run(
        self,
        function: Objective,
        iterate: np.ndarray,
        callbacks: Optional[Sequence[Callback]] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> EvolutionResult:
        """
        Same as ``optimize`` but returns the full EvolutionResult.

        Raises:
            ConfigurationError: If the configuration is invalid (before any work)
            TypeError: If ``iterate`` is not a floating-point numpy array
        """
        self.config.validate()
        if not isinstance(iterate, np.ndarray):
            raise TypeError(
                f"iterate must be a numpy array, got {type(iterate).__name__}"
            )
        if not np.issubdtype(iterate.dtype, np.floating):
            raise TypeError(f"iterate must have a floating dtype, got {iterate.dtype}")

        config = self.config.replace()
        objective = as_objective(function)
        rng = make_rng(self.seed) if rng is None else rng
        callbacks = list(callbacks or [])
        num_elite = config.num_elite

        start_time = time.time()
        for callback in callbacks:
            callback.on_optimization_begin(self, iterate)

        logger.info(
            "CNE: population {} of shape {}, {} elite, max {} generations, tolerance {}",
            config.population_size,
            iterate.shape,
            num_elite,
            config.max_generations,
            config.tolerance,
        )

        population = create_initial_population(iterate, config.population_size, rng)
        checker = TerminationChecker(config.max_generations, config.tolerance)
        history = EvolutionHistory()

        def notify_evaluate(candidate: np.ndarray, fitness: float) -> None:
            for callback in callbacks:
                callback.on_evaluate(self, candidate, fitness)

        generation = 0
        total_evaluations = 0
        initial_best_fitness = None

        while True:
            total_evaluations += population.evaluate(objective, on_evaluate=notify_evaluate)
            best_fitness = population.best_fitness
            if initial_best_fitness is None:
                initial_best_fitness = best_fitness

            stopped = checker.check(generation, best_fitness)

            crossovers = 0
            mutated_entries = 0
            if not stopped:
                report = reproduce(
                    population.candidates,
                    population.ranked_indices(),
                    num_elite,
                    config.mutation_prob,
                    config.mutation_size,
                    rng,
                )
                crossovers = report.crossovers
                mutated_entries = report.mutated_entries

            stats = history.record_generation(
                generation,
                population.fitness,
                num_elite=num_elite,
                crossovers=crossovers,
                mutated_entries=mutated_entries,
            )
            logger.debug(
                "Generation {}: best fitness {}, mean {}, {} crossovers",
                generation,
                stats.best_fitness,
                stats.mean_fitness,
                crossovers,
            )
            for callback in callbacks:
                callback.on_generation_end(self, generation, stats)

            if stopped:
                break
            generation += 1

        # Reproduction is skipped once stopped, so fitness still matches candidates
        best_candidate = population.best_candidate
        np.copyto(iterate, best_candidate)

        logger.info(
            "CNE: terminating after {} generations, {}; best fitness {} (improved by {})",
            generation,
            checker.describe(),
            best_fitness,
            history.improvement(),
        )
        for callback in callbacks:
            callback.on_optimization_end(self, iterate, best_fitness)

        return EvolutionResult(
            best_fitness=best_fitness,
            best_candidate=best_candidate,
            initial_best_fitness=initial_best_fitness,
            generations_completed=generation,
            total_evaluations=total_evaluations,
            termination_reason=checker.reason,
            history=history,
            runtime_seconds=time.time() - start_time,
        )
