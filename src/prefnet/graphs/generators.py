# src/prefnet/graphs/generators.py

"""
Synthetic growth networks with the same time-stamped shape as real data.

networkx.barabasi_albert_graph starts from a star on nodes 0..m and then adds
nodes m+1, ..., n-1, each attaching m edges to existing nodes. Here that
growth order becomes the time step:

    - the initial star edges are at time step 1
    - the edges of node m+j are at time step j+1
"""

import networkx as nx
import numpy as np
import pandas as pd

from prefnet.data.canonical import EDGE_COLUMNS, empty_edges


def generate_ba_graph(n: int, m: int, seed: int) -> nx.Graph:
    """
    Generate a single Barabási–Albert graph.
    """
    if m < 1 or m >= n:
        raise ValueError(f"Barabási–Albert requires 1 <= m < n, got n={n}, m={m}")
    return nx.barabasi_albert_graph(n=n, m=m, seed=seed)


def growth_time_step(u: int, v: int, m: int) -> int:
    newest = max(u, v)
    return max(newest - m, 0) + 1


def ba_edge_frame(G: nx.Graph, m: int) -> pd.DataFrame:
    """Time-stamp the edges of a BA graph by the arrival of their newer endpoint."""
    if G.number_of_edges() == 0:
        return empty_edges()

    rows = []
    for u, v in G.edges():
        lo, hi = (u, v) if u <= v else (v, u)
        rows.append((lo, hi, growth_time_step(lo, hi, m)))

    edges = pd.DataFrame(rows, columns=EDGE_COLUMNS).astype(np.int64)
    return edges.sort_values(EDGE_COLUMNS, kind="mergesort").reset_index(drop=True)


def generate_ba_edges(n: int, m: int, seed: int) -> pd.DataFrame:
    """
    Simulate a BA network and return its (source, target, time_step) edge list.

    Args:
        n: Number of nodes.
        m: Edges attached from each new node.
        seed: Random seed; the same seed gives the same edge list.
    """
    return ba_edge_frame(generate_ba_graph(n=n, m=m, seed=seed), m=m)
