"""
Dual-objective Dijkstra routing over the quantized-coordinate graph.
"""

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import networkx as nx

from ...config.routing_config import ScoringConfig
from ...data.distance_utils import Coordinate
from ...data.models import Edge

logger = logging.getLogger(__name__)


class CostMode(Enum):
    """Edge cost strategies."""
    DISTANCE = "distance"
    SAFETY = "safety"


def edge_cost(mode: CostMode, length: float, safety_score: float,
              safety_weight: float = 10.0) -> float:
    """
    Cost of traversing one edge.

    In safety mode every point below 100 adds ``safety_weight`` meters, which
    stays non-negative because scores never exceed 100.
    """
    if mode == CostMode.DISTANCE:
        return length
    return length + (100 - safety_score) * safety_weight


class PathResult:
    """Container for a solved path and its metrics."""

    def __init__(self, nodes: List[str], edges: List[Edge], total_cost: float,
                 mode: CostMode, default_safety: float = 70.0):
        """
        Initialize path result.

        Args:
            nodes: Node keys from source to target
            edges: Traversed edges in source-to-target order
            total_cost: Accumulated cost under ``mode``
            mode: Cost strategy used
            default_safety: Average safety reported for an edgeless path
        """
        self.nodes = nodes
        self.edges = edges
        self.total_cost = total_cost
        self.mode = mode
        self.calculation_time: Optional[float] = None

        self.total_distance = sum(e.length for e in edges)
        if edges:
            self.average_safety_score = sum(e.safety_score for e in edges) / len(edges)
        else:
            self.average_safety_score = default_safety

    def coordinates(self) -> List[Coordinate]:
        """Chain edge geometry into a polyline, empty when there are no edges."""
        if not self.edges:
            return []

        coords = [self.edges[0].start]
        for edge in self.edges:
            coords.append(edge.end)
        return coords

    def get_summary(self) -> Dict[str, Any]:
        return {
            'mode': self.mode.value,
            'node_count': len(self.nodes),
            'edge_count': len(self.edges),
            'total_distance_m': round(self.total_distance, 1),
            'total_cost': round(self.total_cost, 1),
            'average_safety_score': round(self.average_safety_score, 1),
            'calculation_time_ms': round(self.calculation_time * 1000, 1) if self.calculation_time else None
        }


class DualObjectivePathSolver:
    """
    Dijkstra shortest-path search parameterized by an edge cost strategy.

    The two objectives are independent searches over the same graph, so a
    failure of one does not affect the other.
    """

    def __init__(self, graph: nx.MultiDiGraph, config: Optional[ScoringConfig] = None):
        """
        Initialize path solver.

        Args:
            graph: Routing graph from build_routing_graph
            config: Routing configuration parameters
        """
        self.graph = graph
        self.config = config or ScoringConfig()

    def _edge_cost(self, mode: CostMode, data: Dict[str, Any]) -> float:
        return edge_cost(mode, data['length'], data['safety_score'], self.config.safety_cost_weight)

    def _weight_function(self, mode: CostMode) -> Callable[[str, str, Dict], float]:
        # MultiDiGraph passes every parallel edge between u and v, keyed
        def weight(u, v, parallel_edges):
            return min(self._edge_cost(mode, data) for data in parallel_edges.values())
        return weight

    def find_path(self, source: str, target: str, mode: CostMode) -> Optional[PathResult]:
        """
        Find the minimum-cost path between two nodes.

        Args:
            source: Source node key
            target: Target node key
            mode: Cost strategy

        Returns:
            PathResult, or None if the target is unreachable or a node is missing
        """
        start_time = time.time()

        try:
            total_cost, nodes = nx.single_source_dijkstra(
                self.graph, source, target, weight=self._weight_function(mode)
            )
        except (nx.NetworkXNoPath, nx.NodeNotFound) as e:
            logger.warning(f"No {mode.value} path from {source} to {target}: {e}")
            return None

        edges = self._reconstruct_edges(nodes, mode)

        result = PathResult(nodes, edges, total_cost, mode, self.config.default_edge_safety)
        result.calculation_time = time.time() - start_time

        logger.info(f"{mode.value.capitalize()} path found: {len(edges)} edges, "
                    f"{result.total_distance:.0f}m, "
                    f"calculated in {result.calculation_time * 1000:.1f}ms")
        return result

    def _reconstruct_edges(self, nodes: List[str], mode: CostMode) -> List[Edge]:
        """Pick the cheapest parallel edge for each hop of the node path."""
        edges = []

        for u, v in zip(nodes[:-1], nodes[1:]):
            data = min(self.graph[u][v].values(), key=lambda d: self._edge_cost(mode, d))
            edges.append(Edge(
                target=v,
                length=data['length'],
                safety_score=data['safety_score'],
                start=data['start'],
                end=data['end']
            ))

        return edges

    def find_both(self, source: str, target: str) -> Dict[CostMode, Optional[PathResult]]:
        """Run the distance and safety searches for the same node pair."""
        return {
            CostMode.DISTANCE: self.find_path(source, target, CostMode.DISTANCE),
            CostMode.SAFETY: self.find_path(source, target, CostMode.SAFETY)
        }
