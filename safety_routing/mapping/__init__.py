"""
Routing graph construction.

This module contains:
- Graph building from scored road segments
- Nearest-node lookup
"""

from .graph_builder import build_routing_graph, find_nearest_node, get_graph_statistics, iter_edges

__all__ = [
    'build_routing_graph',
    'find_nearest_node',
    'get_graph_statistics',
    'iter_edges'
]
