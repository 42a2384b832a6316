from .temporal import Edge, TemporalGraph, partition, require_edges, DEFAULT_THRESHOLD
from .generators import generate_ba_edges, generate_ba_graph

__all__ = [
    "Edge",
    "TemporalGraph",
    "partition",
    "require_edges",
    "DEFAULT_THRESHOLD",
    "generate_ba_edges",
    "generate_ba_graph",
]
