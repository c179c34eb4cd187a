"""Core Game of Life engine: cell store, neighbor indexes, rules and scheduler."""

from .cells import Cell, CellSnapshot, CellStore, GridConfigurationError, Position
from .config import SimulationConfig
from .engine import LifeEngine, create_engine, simulate
from .neighbors import DenseNeighborIndex, KDTreeNeighborIndex, NeighborIndex, create_neighbor_index
from .rules import LifeRule, apply_rule, next_state

__all__ = [
    'Cell',
    'CellSnapshot',
    'CellStore',
    'GridConfigurationError',
    'Position',
    'SimulationConfig',
    'LifeEngine',
    'create_engine',
    'simulate',
    'NeighborIndex',
    'KDTreeNeighborIndex',
    'DenseNeighborIndex',
    'create_neighbor_index',
    'LifeRule',
    'apply_rule',
    'next_state',
]
