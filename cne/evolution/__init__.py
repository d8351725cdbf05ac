"""
Conventional Neural Evolution

A population-based optimizer for fixed-topology parameter arrays such as
neural network weights.

Key components:
- Population: Candidates around the starting point and their fitness
- Operators: Elite selection, uniform crossover, additive mutation
- TerminationChecker: Generation cap, target fitness and stagnation criteria
- CNE: Main generation loop

Example usage:
    import numpy as np
    from cne.evolution import CNE, CNEConfig

    config = CNEConfig(population_size=50, max_generations=200)
    optimizer = CNE(config, seed=42)

    weights = np.zeros((2, 1))
    best = optimizer.optimize(lambda w: float(np.sum(w ** 2)), weights)

    print(f"Best fitness: {best:.6f}")
"""

from .fitness import ObjectiveFunction, as_objective, evaluate_fitness
from .operators import (
    ReproductionReport,
    compute_num_elite,
    rank_by_fitness,
    elitism_selection,
    uniform_crossover,
    mutate_candidate,
    mutate_population,
    reproduce,
)
from .population import Population, create_initial_population
from .termination import TerminationChecker, TerminationReason, TerminationState
from .history import EvolutionHistory, GenerationStats
from .callbacks import Callback, ProgressCallback, HistoryCallback
from .engine import CNE, CNEConfig, EvolutionResult

__all__ = [
    # Core classes
    'CNE',
    'CNEConfig',
    'EvolutionResult',
    'Population',
    'EvolutionHistory',
    'GenerationStats',
    # Objective
    'ObjectiveFunction',
    'as_objective',
    'evaluate_fitness',
    # Operators
    'ReproductionReport',
    'compute_num_elite',
    'rank_by_fitness',
    'elitism_selection',
    'uniform_crossover',
    'mutate_candidate',
    'mutate_population',
    'reproduce',
    # Population
    'create_initial_population',
    # Termination
    'TerminationChecker',
    'TerminationReason',
    'TerminationState',
    # Callbacks
    'Callback',
    'ProgressCallback',
    'HistoryCallback',
]
