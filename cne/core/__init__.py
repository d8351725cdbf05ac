"""Core numeric helpers shared by the optimizers."""

from .random import make_rng
from .update import AdaGradUpdate, AdaGradPolicy

__all__ = [
    'make_rng',
    'AdaGradUpdate',
    'AdaGradPolicy',
]
