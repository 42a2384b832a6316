from typing import Dict, Optional, Tuple

import networkx as nx

from prefnet.graphs.temporal import TemporalGraph

Positions = Dict[int, Tuple[float, float]]


def compute_layout(
    graph: TemporalGraph,
    seed: int,
    iterations: int = 50,
    k: Optional[float] = None,
) -> Positions:
    """
    Force-directed (Fruchterman-Reingold) coordinates for every node.

    The same graph and seed always give the same coordinates. An empty graph
    gives an empty mapping.
    """
    if graph.number_of_nodes() == 0:
        return {}

    G = graph.to_networkx()
    pos = nx.spring_layout(G, k=k, iterations=iterations, seed=seed)
    return {int(n): (float(xy[0]), float(xy[1])) for n, xy in pos.items()}
