"""
Entity-oriented Conway's Game of Life

Each grid coordinate is a cell record carrying its position, life state and
cached neighbor count. A single engine steps generations with either a k-d
tree or a dense lookup for neighbor counting.
"""

from .core import (
    CellStore,
    GridConfigurationError,
    LifeEngine,
    LifeRule,
    SimulationConfig,
    simulate,
)
from .patterns import get_seed

__version__ = "0.1.0"

__all__ = [
    'CellStore',
    'GridConfigurationError',
    'LifeEngine',
    'LifeRule',
    'SimulationConfig',
    'simulate',
    'get_seed',
]
