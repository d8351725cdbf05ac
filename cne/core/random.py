"""
Random source handling.

Every stochastic step of the optimizer draws from one explicitly passed
``numpy.random.Generator``; nothing touches the global numpy or ``random``
state.
"""

from typing import Union

import numpy as np


SeedLike = Union[None, int, np.random.Generator]


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """
    Build the random stream for a run.

    Args:
        seed: Integer seed, an existing Generator (returned unchanged),
            or None for fresh OS entropy

    Returns:
        numpy Generator
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)
