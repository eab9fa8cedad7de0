"""
Route planning over scored road networks.
"""

from .route_planner import RoutePlanner

__all__ = ['RoutePlanner']
