import os
import pickle

import networkx as nx
import numpy as np
import pandas as pd

from prefnet.data.canonical import EDGE_COLUMNS, ActorIndex


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def read_edge_list(path: str) -> pd.DataFrame:
    """Read a source,target,time_step CSV written by write_edge_list."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Edge list not found: {path}")

    with open(path, "r", encoding="utf-8", newline="") as f:
        edges = pd.read_csv(f)

    missing = [c for c in EDGE_COLUMNS if c not in edges.columns]
    if missing:
        raise ValueError(f"Edge list {path} is missing column(s) {missing}")
    return edges[EDGE_COLUMNS].astype(np.int64)


def write_edge_list(edges: pd.DataFrame, path: str) -> None:
    _ensure_parent(path)
    edges[EDGE_COLUMNS].to_csv(path, index=False)


def write_actor_index(index: ActorIndex, path: str) -> None:
    _ensure_parent(path)
    index.to_frame().to_csv(path, index=False)


def save_graph_gpickle(G: nx.Graph, path: str) -> None:
    _ensure_parent(path)
    with open(path, "wb") as f:
        pickle.dump(G, f, protocol=pickle.HIGHEST_PROTOCOL)


def read_graph(path: str, fmt: str = "gpickle") -> nx.Graph:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Graph file not found: {path}")

    if fmt == "edge_list":
        # source,target,time_step CSV
        edges = read_edge_list(path)
        G = nx.Graph()
        for s, t, ts in edges.itertuples(index=False, name=None):
            G.add_edge(int(s), int(t), time_step=int(ts))
        return G

    elif fmt == "gpickle":
        with open(path, "rb") as f:
            G = pickle.load(f)
        if not isinstance(G, nx.Graph):
            raise ValueError("Loaded object is not a NetworkX graph.")
        return G

    else:
        raise ValueError(f"Unsupported graph format: {fmt}")
