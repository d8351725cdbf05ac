"""
Termination criteria.

The checker is consulted once per generation, right after fitness
evaluation, and stops the run when the first of these holds:

1. The generation counter reached ``max_generations`` (None: no cap)
2. The best fitness is at or below ``tolerance``
3. The best fitness moved less than ``tolerance`` since the previous generation

A negative tolerance disables 2 and 3. Once stopped, the checker stays stopped.
"""

from enum import Enum
from typing import Optional

from loguru import logger


class TerminationState(Enum):
    RUNNING = 'running'
    STOPPED = 'stopped'


class TerminationReason(Enum):
    MAX_GENERATIONS = 'max_generations'
    TOLERANCE_REACHED = 'tolerance_reached'
    CONVERGED = 'converged'


class TerminationChecker:
    """Multi-criterion stopping state machine for one optimization run."""

    def __init__(self, max_generations: Optional[int], tolerance: float):
        self.max_generations = max_generations
        self.tolerance = tolerance
        self.state = TerminationState.RUNNING
        self.reason: Optional[TerminationReason] = None
        self.previous_best: Optional[float] = None

    @property
    def stopped(self) -> bool:
        return self.state is TerminationState.STOPPED

    def check(self, generation: int, best_fitness: float) -> bool:
        """
        Update the state with a freshly evaluated generation.

        Args:
            generation: Current generation counter (0 for the initial population)
            best_fitness: Lowest fitness of this generation

        Returns:
            True if the run must stop
        """
        if self.stopped:
            return True

        reason = self._match(generation, best_fitness)
        self.previous_best = best_fitness

        if reason is not None:
            self.state = TerminationState.STOPPED
            self.reason = reason
            logger.debug(
                "Termination at generation {}: {} (best fitness {})",
                generation,
                reason.value,
                best_fitness,
            )
        return self.stopped

    def _match(self, generation: int, best_fitness: float) -> Optional[TerminationReason]:
        if self.max_generations is not None and generation >= self.max_generations:
            return TerminationReason.MAX_GENERATIONS

        if self.tolerance < 0:
            return None

        if best_fitness <= self.tolerance:
            return TerminationReason.TOLERANCE_REACHED

        if (
            self.previous_best is not None
            and abs(self.previous_best - best_fitness) < self.tolerance
        ):
            return TerminationReason.CONVERGED

        return None

    def describe(self) -> str:
        if not self.stopped:
            return 'running'
        if self.reason is TerminationReason.MAX_GENERATIONS:
            return f"reached maximum of {self.max_generations} generations"
        if self.reason is TerminationReason.TOLERANCE_REACHED:
            return f"best fitness at or below tolerance {self.tolerance}"
        return f"best fitness changed less than {self.tolerance} between generations"
