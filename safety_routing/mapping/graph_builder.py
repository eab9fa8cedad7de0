"""
Routing graph construction from scored road segments.
"""

import logging
from typing import Dict, Iterator, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from ..data.distance_utils import coordinate_key, distance, haversine_distances, parse_coordinate_key
from ..data.models import Edge, RoadSegment

logger = logging.getLogger(__name__)

DEFAULT_EDGE_SAFETY = 70.0
NODE_PRECISION = 4


def build_routing_graph(roads: Sequence[RoadSegment],
                        precision: int = NODE_PRECISION,
                        default_safety: float = DEFAULT_EDGE_SAFETY) -> nx.MultiDiGraph:
    """
    Build an undirected routing graph as a MultiDiGraph of paired directed edges.

    Nodes are quantized coordinate keys so segments meeting at the same
    junction share a node. Parallel edges from different segments are kept.

    Args:
        roads: Scored road segments
        precision: Decimal places used for node keys
        default_safety: Score for segments that have not been scored

    Returns:
        NetworkX MultiDiGraph with 'length', 'safety_score', 'start', 'end'
        and 'road_id' edge attributes
    """
    graph = nx.MultiDiGraph()
    skipped = 0

    for road in roads:
        coords = road.coordinates
        if len(coords) < 2:
            skipped += 1
            continue

        safety_score = road.safety_score if road.safety_score is not None else default_safety

        for start, end in zip(coords[:-1], coords[1:]):
            start_key = coordinate_key(start, precision)
            end_key = coordinate_key(end, precision)
            length = distance(start, end)

            _add_node(graph, start_key)
            _add_node(graph, end_key)

            graph.add_edge(start_key, end_key, length=length, safety_score=safety_score,
                           start=tuple(start), end=tuple(end), road_id=road.id)
            graph.add_edge(end_key, start_key, length=length, safety_score=safety_score,
                           start=tuple(end), end=tuple(start), road_id=road.id)

    if skipped:
        logger.debug(f"Skipped {skipped} road segments with fewer than 2 points")

    logger.info(f"Routing graph built: {graph.number_of_nodes()} nodes, {graph.number_of_edges()} edges")
    return graph


def _add_node(graph: nx.MultiDiGraph, key: str) -> None:
    if key not in graph:
        # Node position is the quantized key, not the raw vertex
        lon, lat = parse_coordinate_key(key)
        graph.add_node(key, x=lon, y=lat)


def iter_edges(graph: nx.MultiDiGraph, node: str) -> Iterator[Edge]:
    """Yield the outgoing edges of a node as Edge values."""
    for _, target, data in graph.out_edges(node, data=True):
        yield Edge(
            target=target,
            length=data['length'],
            safety_score=data['safety_score'],
            start=data['start'],
            end=data['end']
        )


def find_nearest_node(graph: nx.MultiDiGraph, lon: float, lat: float) -> Optional[Tuple[str, float]]:
    """
    Find the graph node closest to a coordinate by great-circle distance.

    A linear scan over all nodes. Callers should treat a distance above
    roughly 500m as off-network.

    Returns:
        Tuple of (node_key, distance_m), or None for an empty graph
    """
    if graph.number_of_nodes() == 0:
        return None

    keys = list(graph.nodes)
    lons = np.array([graph.nodes[k]['x'] for k in keys])
    lats = np.array([graph.nodes[k]['y'] for k in keys])

    distances = haversine_distances(lat, lon, lats, lons)
    idx = int(np.argmin(distances))

    return keys[idx], float(distances[idx])


def get_graph_statistics(graph: nx.MultiDiGraph) -> Dict[str, float]:
    """
    Get basic statistics about a routing graph.

    Returns:
        Dictionary with node/edge counts, component count and total length
    """
    lengths = [data['length'] for _, _, data in graph.edges(data=True)]

    return {
        'nodes': graph.number_of_nodes(),
        'edges': graph.number_of_edges(),
        'components': nx.number_weakly_connected_components(graph) if graph.number_of_nodes() else 0,
        # Each physical segment appears as two directed edges
        'total_length_m': round(sum(lengths) / 2, 1)
    }
