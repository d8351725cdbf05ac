"""
Evolutionary operators: selection, crossover, and mutation.

All operators act on candidates stored as numpy arrays and draw randomness
from an explicitly passed ``numpy.random.Generator``. Within one
reproduction step the draws happen in a fixed order:

1. For each dropout pair: mom index, dad index, per-entry crossover bits
2. For each candidate in index order: mutation mask, then mutation noise
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
from loguru import logger

from ..exceptions import ShapeMismatchError


@dataclass
class ReproductionReport:
    """What a single reproduction step did."""
    num_elite: int
    crossovers: int
    mutated_entries: int


# =============================================================================
# Selection Operators
# =============================================================================

def compute_num_elite(population_size: int, select_percent: float) -> int:
    """
    Number of candidates kept as parents each generation.

    ``floor(population_size * select_percent)`` rounded down to an even
    number, since parents are consumed in pairs.

    Args:
        population_size: Number of candidates in the population
        select_percent: Fraction of the population kept as elite

    Returns:
        Even elite count in ``[0, population_size]``
    """
    num_elite = int(np.floor(population_size * select_percent))
    num_elite -= num_elite % 2
    return max(0, min(num_elite, population_size))


def rank_by_fitness(fitness: np.ndarray) -> np.ndarray:
    """
    Indices sorted by ascending fitness (best first).

    The sort is stable, so ties keep their population order. NaN values sort
    last; their relative order is otherwise not guaranteed.
    """
    return np.argsort(fitness, kind='stable')


def elitism_selection(sorted_indices: np.ndarray, num_elite: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a ranking into elite and dropout indices.

    Args:
        sorted_indices: Output of ``rank_by_fitness``
        num_elite: Number of elite candidates

    Returns:
        (elite, dropouts); dropouts are the worst candidates, best first
    """
    return sorted_indices[:num_elite], sorted_indices[num_elite:]


# =============================================================================
# Crossover Operators
# =============================================================================

def uniform_crossover(
    mom: np.ndarray,
    dad: np.ndarray,
    rng: np.random.Generator,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Uniform crossover with one coin flip per entry.

    Where the bit is 0 the first child takes ``mom``'s entry and the second
    child ``dad``'s; where it is 1 the roles swap. No new values are created.

    Args:
        mom: First parent
        dad: Second parent
        rng: Random stream

    Returns:
        Tuple of two new child arrays (parents are not modified)
    """
    if mom.shape != dad.shape:
        raise ShapeMismatchError(
            f"cannot cross over parents of shapes {mom.shape} and {dad.shape}"
        )

    bits = rng.integers(0, 2, size=mom.shape).astype(bool)
    child1 = np.where(bits, dad, mom)
    child2 = np.where(bits, mom, dad)
    return child1, child2


# =============================================================================
# Mutation Operators
# =============================================================================

def mutate_candidate(
    candidate: np.ndarray,
    mutation_prob: float,
    mutation_size: float,
    rng: np.random.Generator,
) -> int:
    """
    Add uniform noise from ``[0, mutation_size)`` to random entries, in place.

    Each entry is mutated independently with probability ``mutation_prob``.
    The noise is never negative. Both random arrays are drawn even when
    nothing ends up mutated.

    Args:
        candidate: Array to mutate (modified)
        mutation_prob: Per-entry mutation probability
        mutation_size: Upper bound of the additive noise
        rng: Random stream

    Returns:
        Number of entries mutated
    """
    mask = rng.random(candidate.shape) < mutation_prob
    noise = rng.uniform(0.0, mutation_size, size=candidate.shape)
    candidate += np.where(mask, noise, 0.0)
    return int(mask.sum())


def mutate_population(
    candidates: List[np.ndarray],
    mutation_prob: float,
    mutation_size: float,
    rng: np.random.Generator,
) -> int:
    """Mutate every candidate in index order. Returns total entries mutated."""
    mutated = 0
    for candidate in candidates:
        mutated += mutate_candidate(candidate, mutation_prob, mutation_size, rng)
    return mutated


# =============================================================================
# Reproduction
# =============================================================================

def reproduce(
    candidates: List[np.ndarray],
    sorted_indices: np.ndarray,
    num_elite: int,
    mutation_prob: float,
    mutation_size: float,
    rng: np.random.Generator,
) -> ReproductionReport:
    """
    Build the next generation in place.

    Dropout slots are refilled two at a time with the children of two elite
    parents drawn uniformly with replacement (so ``mom == dad`` clones a
    parent). With an odd number of dropouts the last one keeps its current
    candidate. With no elite at all, nothing is replaced. Finally every
    candidate, elite included, is mutated.

    Args:
        candidates: Population candidates (modified)
        sorted_indices: Indices ranked best first
        num_elite: Even number of elite candidates
        mutation_prob: Per-entry mutation probability
        mutation_size: Upper bound of the additive mutation noise
        rng: Random stream

    Returns:
        ReproductionReport for this step
    """
    elite, dropouts = elitism_selection(sorted_indices, num_elite)

    crossovers = 0
    if num_elite > 0:
        for i in range(0, len(dropouts) - 1, 2):
            mom = elite[rng.integers(0, num_elite)]
            dad = elite[rng.integers(0, num_elite)]
            child1, child2 = uniform_crossover(candidates[mom], candidates[dad], rng)
            candidates[dropouts[i]] = child1
            candidates[dropouts[i + 1]] = child2
            crossovers += 1
    else:
        logger.debug("reproduce: empty elite set, mutation only")

    mutated = mutate_population(candidates, mutation_prob, mutation_size, rng)

    return ReproductionReport(
        num_elite=num_elite,
        crossovers=crossovers,
        mutated_entries=mutated,
    )
