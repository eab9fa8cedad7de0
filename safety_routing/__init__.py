"""
Safety-Aware Pedestrian Routing

Scores every segment of a pedestrian road network from crime density, camera
coverage, building shadow and land use, then finds a shortest and a
safety-first walking route over the scored network.

## Quick Start

```python
from safety_routing import AppState, load_dataset_bundle

state = AppState(load_dataset_bundle("path/to/datasets"), simulated_hour=22)

routes = state.calculate_routes(
    origin=(139.7210, 35.8080),       # (lon, lat)
    destination=(139.7260, 35.8110)
)
```

## Main Components

- **SafetyScorer**: Network-wide segment scoring and single-point breakdowns
- **RoutePlanner**: Shortest and safety-first route calculation
- **DualObjectivePathSolver**: Dijkstra search with pluggable edge costs
- **ScoringConfig**: Configuration management
- **AppState**: Explicit session state for service layers

## Architecture

- `algorithms/`: Scoring, path solving and route planning
- `mapping/`: Routing graph construction
- `data/`: Data model, geometry utilities and dataset loading
- `config/`: Configuration and fixed category tables
"""

from .algorithms import SafetyScorer, QuantileNormalizer, DualObjectivePathSolver, CostMode, RoutePlanner
from .config import ScoringConfig
from .mapping import build_routing_graph, find_nearest_node
from .data import DatasetBundle, load_dataset_bundle
from .app_state import AppState

# Version information
__version__ = "1.0.0"

# Public API
__all__ = [
    # Main interfaces
    'SafetyScorer',
    'RoutePlanner',
    'ScoringConfig',
    'AppState',

    # Core algorithms
    'QuantileNormalizer',
    'DualObjectivePathSolver',
    'CostMode',
    'build_routing_graph',
    'find_nearest_node',

    # Utilities
    'DatasetBundle',
    'load_dataset_bundle',

    # Metadata
    '__version__'
]
