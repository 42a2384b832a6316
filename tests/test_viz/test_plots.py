from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pytest

from prefnet.estimation.attachment import estimate_alpha
from prefnet.graphs.generators import generate_ba_edges
from prefnet.graphs.temporal import TemporalGraph
from prefnet.metrics.degree import top_degree_nodes
from prefnet.viz.layout import compute_layout
from prefnet.viz.plots import node_sizes, plot_attachment_curve, plot_degree_histogram, plot_network


def ba_graph() -> TemporalGraph:
    return TemporalGraph.from_frame(generate_ba_edges(n=60, m=1, seed=4))


def test_layout_is_seeded() -> None:
    g = ba_graph()

    a = compute_layout(g, seed=1)
    b = compute_layout(g, seed=1)

    assert a == b
    assert set(a) == set(g.nodes())


def test_layout_of_empty_graph() -> None:
    assert compute_layout(TemporalGraph(), seed=0) == {}


def test_node_sizes_grow_with_degree() -> None:
    sizes = node_sizes(TemporalGraph([(0, 1, 1), (0, 2, 1)]))

    assert sizes[0] > sizes[1] == sizes[2]


def test_figures_are_written(tmp_path: Path) -> None:
    g = ba_graph()
    pos = compute_layout(g, seed=3)
    est = estimate_alpha(generate_ba_edges(n=300, m=2, seed=4))

    figs = [
        plot_degree_histogram(g, out_path=str(tmp_path / "hist.png")),
        plot_network(g, pos, highlight=top_degree_nodes(g, 3), labels={0: "zero"},
                     out_path=str(tmp_path / "net.png")),
        plot_attachment_curve(est, out_path=str(tmp_path / "curve.png")),
    ]
    for fig in figs:
        plt.close(fig)

    for name in ("hist.png", "net.png", "curve.png"):
        assert (tmp_path / name).stat().st_size > 0


def test_empty_graph_plots_without_error() -> None:
    empty = TemporalGraph()

    plt.close(plot_degree_histogram(empty))
    plt.close(plot_network(empty, {}))


def test_network_requires_positions_and_palette() -> None:
    g = TemporalGraph([(0, 1, 1)])

    with pytest.raises(ValueError):
        plot_network(g, {0: (0.0, 0.0)})
    with pytest.raises(ValueError):
        plot_network(g, {0: (0.0, 0.0), 1: (1.0, 1.0)}, palette=["red"])
