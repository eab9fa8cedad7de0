"""
Core routing algorithms.
"""

from .path_solver import CostMode, DualObjectivePathSolver, PathResult, edge_cost

__all__ = [
    'CostMode',
    'DualObjectivePathSolver',
    'PathResult',
    'edge_cost'
]
