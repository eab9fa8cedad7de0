"""
Scoring and routing algorithms.

This module contains:
- Risk indicators, quantile normalization and safety aggregation
- Dual-objective Dijkstra path solving
- Route planning
"""

from .scoring.safety_scorer import SafetyScorer
from .scoring.normalization import QuantileNormalizer
from .routing.path_solver import CostMode, DualObjectivePathSolver, PathResult
from .optimization.route_planner import RoutePlanner

__all__ = [
    'SafetyScorer',
    'QuantileNormalizer',
    'CostMode',
    'DualObjectivePathSolver',
    'PathResult',
    'RoutePlanner'
]
