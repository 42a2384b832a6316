# src/prefnet/graphs/temporal.py

"""
Read-only, time-stamped graph views over a canonical edge list.

A TemporalGraph holds a tuple of Edge(source, target, time_step) records and
its node set. Filtering never mutates: subgraph(), snapshot(), cumulative()
and partition() all return new graphs.

Degree convention:
    every edge adds 1 to each endpoint, so repeated edges between the same
    pair are summed and a self-loop adds 2 to its node (networkx convention).
"""

import logging
from collections import Counter
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Dict, FrozenSet, Iterable, Optional, Tuple, Union

import networkx as nx
import numpy as np
import pandas as pd

from prefnet.data.canonical import EDGE_COLUMNS
from prefnet.errors import EmptyResultError

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 5

TimePredicate = Callable[[int], bool]


@dataclass(frozen=True)
class Edge:
    source: int
    target: int
    time_step: int

    def endpoints(self) -> Tuple[int, int]:
        return (self.source, self.target)


EdgeLike = Union[Edge, Tuple[int, int, int]]


class TemporalGraph:
    """
    Undirected (multi)graph over integer nodes with a time step per edge.

    Args:
        edges: Edge records or (source, target, time_step) tuples.
        nodes:
            Optional explicit node set. Nodes listed here but not touched by
            any edge are isolated (degree 0). Edge endpoints are always added.
    """

    def __init__(self, edges: Iterable[EdgeLike] = (), nodes: Optional[Iterable[int]] = None):
        self._edges: Tuple[Edge, ...] = tuple(
            e if isinstance(e, Edge) else Edge(int(e[0]), int(e[1]), int(e[2]))
            for e in edges
        )
        node_set = set(int(n) for n in nodes) if nodes is not None else set()
        for e in self._edges:
            node_set.add(e.source)
            node_set.add(e.target)
        self._nodes: FrozenSet[int] = frozenset(node_set)

    @classmethod
    def from_frame(cls, edges: pd.DataFrame, nodes: Optional[Iterable[int]] = None) -> "TemporalGraph":
        missing = [c for c in EDGE_COLUMNS if c not in edges.columns]
        if missing:
            raise ValueError(f"Edge frame is missing column(s) {missing}")
        triples = edges[EDGE_COLUMNS].itertuples(index=False, name=None)
        return cls(triples, nodes=nodes)

    # -- basic accessors -------------------------------------------------

    def nodes(self) -> Tuple[int, ...]:
        return tuple(sorted(self._nodes))

    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    def number_of_nodes(self) -> int:
        return len(self._nodes)

    def number_of_edges(self) -> int:
        return len(self._edges)

    def is_empty(self) -> bool:
        return not self._edges

    def __contains__(self, node: int) -> bool:
        return node in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"TemporalGraph(nodes={self.number_of_nodes()}, edges={self.number_of_edges()})"

    def time_steps(self) -> Tuple[int, ...]:
        return tuple(sorted({e.time_step for e in self._edges}))

    # -- degree ----------------------------------------------------------

    @cached_property
    def _degrees(self) -> Dict[int, int]:
        counts: Counter = Counter()
        for e in self._edges:
            counts[e.source] += 1
            counts[e.target] += 1
        return {n: counts.get(n, 0) for n in sorted(self._nodes)}

    def degree(self, node: int) -> int:
        if node not in self._nodes:
            raise KeyError(f"Node {node} is not in the graph")
        return self._degrees[node]

    def degrees(self) -> Dict[int, int]:
        return dict(self._degrees)

    # -- derived views ---------------------------------------------------

    def subgraph(self, predicate: TimePredicate) -> "TemporalGraph":
        """
        Edges whose time step satisfies `predicate`, plus their endpoints.
        A predicate that matches nothing yields an empty graph.
        """
        return TemporalGraph(e for e in self._edges if predicate(e.time_step))

    def snapshot(self, t: int) -> "TemporalGraph":
        return self.subgraph(lambda ts: ts == t)

    def cumulative(self, t: int) -> "TemporalGraph":
        return self.subgraph(lambda ts: ts <= t)

    # -- conversions -----------------------------------------------------

    def to_frame(self) -> pd.DataFrame:
        if not self._edges:
            return pd.DataFrame({c: pd.Series(dtype=np.int64) for c in EDGE_COLUMNS})
        return pd.DataFrame(
            [(e.source, e.target, e.time_step) for e in self._edges],
            columns=EDGE_COLUMNS,
        ).astype(np.int64)

    def to_networkx(self) -> nx.Graph:
        """
        Collapse to a simple nx.Graph for layout and drawing.

        Edge attributes:
            time_step: first time step the pair appears in
            weight: number of edges between the pair
        """
        G = nx.Graph()
        G.add_nodes_from(sorted(self._nodes))
        for e in self._edges:
            u, v = e.endpoints()
            if G.has_edge(u, v):
                G[u][v]["weight"] += 1
                G[u][v]["time_step"] = min(G[u][v]["time_step"], e.time_step)
            else:
                G.add_edge(u, v, time_step=e.time_step, weight=1)
        return G


def partition(
    graph: TemporalGraph,
    threshold: int = DEFAULT_THRESHOLD,
    warn_empty: bool = True,
) -> Tuple[TemporalGraph, TemporalGraph]:
    """
    Split a graph into "pre" (time_step < threshold) and
    "post" (time_step >= threshold) views.

    The two edge sets are disjoint and together recover every edge.
    """
    pre = graph.subgraph(lambda ts: ts < threshold)
    post = graph.subgraph(lambda ts: ts >= threshold)
    if warn_empty:
        for name, part in (("pre", pre), ("post", post)):
            if part.is_empty():
                logger.warning("%s partition (threshold=%d) has no edges", name, threshold)
    return pre, post


def require_edges(graph: TemporalGraph, what: str = "graph") -> TemporalGraph:
    """Raise EmptyResultError for callers that cannot work with an empty graph."""
    if graph.is_empty():
        raise EmptyResultError(f"{what} has no edges")
    return graph
