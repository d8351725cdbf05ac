"""
AdaGrad update policy.

Adapts the step for every parameter by the root of its accumulated squared
gradients: parameters with large past gradients take smaller steps.

The configuration (``AdaGradUpdate``) is reusable across optimization runs;
``initialize`` returns a fresh ``AdaGradPolicy`` holding the per-run
accumulator.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..exceptions import ShapeMismatchError


@dataclass
class AdaGradUpdate:
    """
    AdaGrad update configuration.

    Attributes:
        epsilon: Added to the root of the accumulator to avoid division by zero
    """
    epsilon: float = 1e-8

    def initialize(self, rows: int, cols: int) -> 'AdaGradPolicy':
        """
        Start a new optimization run.

        Args:
            rows: Number of rows of the gradient matrix
            cols: Number of columns of the gradient matrix

        Returns:
            Policy with a zero accumulator of shape (rows, cols)
        """
        return AdaGradPolicy(self, np.zeros((rows, cols)))


class AdaGradPolicy:
    """Per-run AdaGrad state."""

    def __init__(self, parent: AdaGradUpdate, accumulator: np.ndarray):
        self.parent = parent
        self.accumulator = accumulator

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.accumulator.shape

    def update(
        self,
        iterate: np.ndarray,
        step_size: float,
        gradient: np.ndarray,
    ) -> None:
        """
        Apply one update to ``iterate`` in place.

        Args:
            iterate: Parameters being optimized (modified)
            step_size: Step size for this iteration
            gradient: Gradient of the objective at ``iterate``

        Raises:
            ShapeMismatchError: If iterate, gradient and accumulator shapes differ
        """
        if gradient.shape != self.accumulator.shape:
            raise ShapeMismatchError(
                f"gradient shape {gradient.shape} does not match "
                f"accumulator shape {self.accumulator.shape}"
            )
        if iterate.shape != gradient.shape:
            raise ShapeMismatchError(
                f"iterate shape {iterate.shape} does not match "
                f"gradient shape {gradient.shape}"
            )

        self.accumulator += gradient * gradient
        iterate -= (step_size * gradient) / (
            np.sqrt(self.accumulator) + self.parent.epsilon
        )
