"""
Objective (fitness) capability.

An objective is anything that maps a candidate parameter array to a scalar,
lower being better. Plain callables and objects exposing ``evaluate`` are
both accepted.
"""

from typing import Callable, Protocol, Union

import numpy as np


class ObjectiveFunction(Protocol):
    def evaluate(self, candidate: np.ndarray) -> float:
        ...


Objective = Union[ObjectiveFunction, Callable[[np.ndarray], float]]


def as_objective(function: Objective) -> Callable[[np.ndarray], float]:
    """
    Normalize an objective to a plain callable.

    Args:
        function: Callable or object with an ``evaluate(candidate)`` method

    Returns:
        Callable taking a candidate and returning its fitness

    Raises:
        TypeError: If ``function`` is neither
    """
    evaluate = getattr(function, 'evaluate', None)
    if callable(evaluate):
        return evaluate
    if callable(function):
        return function
    raise TypeError(
        f"objective must be callable or define evaluate(), got {type(function).__name__}"
    )


def evaluate_fitness(
    objective: Callable[[np.ndarray], float],
    candidate: np.ndarray,
) -> float:
    """Evaluate one candidate. NaN and inf are returned unchanged."""
    return float(objective(candidate))
