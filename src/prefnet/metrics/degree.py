# src/prefnet/metrics/degree.py

"""
Degree statistics for a single graph snapshot.

- degree_map(G): node -> degree, isolated nodes included
- degree_histogram(G): degree -> number of nodes with that degree
- degree_summary(G): DegreeSummary with mean / max degree and sizes
- top_degree_nodes(G, k): the k best-connected nodes (hubs)

Everything is recomputed from the snapshot passed in; nothing is cached
across snapshots.
"""

from dataclasses import dataclass
from typing import Dict, List

from prefnet.graphs.temporal import TemporalGraph


def degree_map(graph: TemporalGraph) -> Dict[int, int]:
    """
    Per-node degree. Repeated edges are summed and a self-loop counts twice,
    so sum(degree_map(G).values()) == 2 * G.number_of_edges() always holds.
    """
    return graph.degrees()


def degree_sequence(graph: TemporalGraph) -> List[int]:
    """Degrees in node order. Empty graph -> []."""
    return list(degree_map(graph).values())


def degree_histogram(graph: TemporalGraph) -> Dict[int, int]:
    """
    Number of nodes per degree value, sorted by degree.
    Degrees with no nodes are left out.
    """
    counts: Dict[int, int] = {}
    for d in degree_sequence(graph):
        counts[d] = counts.get(d, 0) + 1
    return dict(sorted(counts.items()))


@dataclass
class DegreeSummary:
    """
    Attributes:
        num_nodes: |V| of the snapshot
        num_edges: |E| of the snapshot
        mean_degree: 2|E| / |V| (0.0 for an empty graph)
        max_degree: largest degree (0 for an empty graph)
    """
    num_nodes: int
    num_edges: int
    mean_degree: float
    max_degree: int


def degree_summary(graph: TemporalGraph) -> DegreeSummary:
    degrees = degree_sequence(graph)
    n = len(degrees)
    return DegreeSummary(
        num_nodes=n,
        num_edges=graph.number_of_edges(),
        mean_degree=(sum(degrees) / n) if n else 0.0,
        max_degree=max(degrees) if degrees else 0,
    )


def top_degree_nodes(graph: TemporalGraph, k: int) -> List[int]:
    """
    The k highest-degree nodes, ties broken by the smaller node id.
    Returns fewer than k nodes when the graph is smaller than k.
    """
    if k <= 0:
        raise ValueError(f"k must be positive, got {k}")

    ranked = sorted(degree_map(graph).items(), key=lambda x: (-x[1], x[0]))
    return [node for node, _ in ranked[:k]]
