# src/prefnet/viz/plots.py

"""
Figures for the popularity analysis.

- plot_degree_histogram: distribution of node degrees in a snapshot
- plot_network: nodes at precomputed positions, sized by degree
- plot_attachment_curve: estimated A_k on log-log axes with the fitted slope

Each function returns the matplotlib Figure and saves it when `out_path`
is given. Callers close figures they no longer need.
"""

import os
from typing import Dict, Optional, Sequence

from matplotlib.figure import Figure
import matplotlib.pyplot as plt
import numpy as np

from prefnet.config import DEFAULT_PALETTE
from prefnet.estimation.attachment import AttachmentEstimate
from prefnet.graphs.temporal import TemporalGraph
from prefnet.metrics.degree import degree_histogram, degree_map
from prefnet.viz.layout import Positions


def _save(fig: Figure, out_path: Optional[str]) -> None:
    if out_path is None:
        return
    parent = os.path.dirname(out_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    fig.savefig(out_path, dpi=300, bbox_inches="tight")


def plot_degree_histogram(
    graph: TemporalGraph,
    title: str = "Degree distribution",
    color: str = DEFAULT_PALETTE[0],
    out_path: Optional[str] = None,
) -> Figure:
    hist = degree_histogram(graph)
    fig, ax = plt.subplots()
    if hist:
        ax.bar(list(hist.keys()), list(hist.values()), color=color, width=0.8)
    ax.set_xlabel("Degree")
    ax.set_ylabel("Number of nodes")
    ax.set_title(title)
    fig.tight_layout()
    _save(fig, out_path)
    return fig


def node_sizes(graph: TemporalGraph, base: float = 20.0, scale: float = 15.0) -> Dict[int, float]:
    """Marker area per node, growing linearly with degree."""
    return {n: base + scale * d for n, d in degree_map(graph).items()}


def plot_network(
    graph: TemporalGraph,
    positions: Positions,
    sizes: Optional[Dict[int, float]] = None,
    highlight: Sequence[int] = (),
    palette: Sequence[str] = DEFAULT_PALETTE,
    labels: Optional[Dict[int, str]] = None,
    title: str = "",
    out_path: Optional[str] = None,
) -> Figure:
    """
    Draw a snapshot at the given positions.

    palette[0] colors ordinary nodes and palette[1] the `highlight` nodes
    (e.g. the top-degree hubs).
    """
    if len(palette) < 2:
        raise ValueError("palette needs at least two colors")

    missing = [n for n in graph.nodes() if n not in positions]
    if missing:
        raise ValueError(f"No position for node(s) {missing[:10]}")

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.set_axis_off()
    if title:
        ax.set_title(title)

    if graph.number_of_nodes() == 0:
        _save(fig, out_path)
        return fig

    if sizes is None:
        sizes = node_sizes(graph)

    for e in graph.edges():
        (x0, y0), (x1, y1) = positions[e.source], positions[e.target]
        ax.plot([x0, x1], [y0, y1], color="#999999", linewidth=0.5, alpha=0.6, zorder=1)

    nodes = graph.nodes()
    hubs = set(highlight)
    xy = np.array([positions[n] for n in nodes])
    colors = [palette[1] if n in hubs else palette[0] for n in nodes]
    ax.scatter(xy[:, 0], xy[:, 1], s=[sizes.get(n, 20.0) for n in nodes], c=colors, zorder=2)

    if labels:
        for n in nodes:
            if n in labels:
                x, y = positions[n]
                ax.annotate(labels[n], (x, y), fontsize=7, zorder=3)

    fig.tight_layout()
    _save(fig, out_path)
    return fig


def plot_attachment_curve(
    estimate: AttachmentEstimate,
    color: str = DEFAULT_PALETTE[0],
    out_path: Optional[str] = None,
) -> Figure:
    ks = np.array(list(estimate.curve.keys()), dtype=np.float64)
    a = np.array(list(estimate.curve.values()), dtype=np.float64)

    fig, ax = plt.subplots()
    ax.loglog(ks, a, marker="o", linestyle="none", color=color, label=r"$A_k$")
    if len(ks):
        # Fitted power law through the geometric mean of the points
        anchor = np.exp(np.mean(np.log(a)) - estimate.alpha * np.mean(np.log(ks)))
        grid = np.linspace(ks.min(), ks.max(), 100)
        ax.loglog(grid, anchor * grid ** estimate.alpha, color="black", linewidth=1,
                  label=rf"$\alpha$ = {estimate.alpha:.2f}")
    ax.set_xlabel("Degree k")
    ax.set_ylabel(r"Attachment rate $A_k$")
    ax.set_title("Preferential attachment")
    ax.legend()
    fig.tight_layout()
    _save(fig, out_path)
    return fig
