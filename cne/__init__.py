"""Conventional Neural Evolution optimizer and the AdaGrad update policy."""

from .exceptions import CNEError, ConfigurationError, ShapeMismatchError
from .core import AdaGradUpdate, AdaGradPolicy, make_rng
from .evolution import CNE, CNEConfig, EvolutionResult, TerminationReason

__version__ = '0.1.0'

__all__ = [
    'CNE',
    'CNEConfig',
    'EvolutionResult',
    'TerminationReason',
    'AdaGradUpdate',
    'AdaGradPolicy',
    'make_rng',
    'CNEError',
    'ConfigurationError',
    'ShapeMismatchError',
]
