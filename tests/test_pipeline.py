from __future__ import annotations

import pandas as pd
import pytest

from prefnet.config import EventColumns, PipelineConfig, env_threshold
from prefnet.data.canonical import edge_triples
from prefnet.errors import DataError
from prefnet.graphs.generators import generate_ba_edges
from prefnet.graphs.io import read_edge_list, write_edge_list
from prefnet.graphs.temporal import Edge
from prefnet.pipeline import run_edge_list, run_pipeline, run_synthetic


def test_example_scenario(example_csv: str) -> None:
    result = run_pipeline(example_csv, PipelineConfig(threshold=2))

    assert result.index.names == ("A", "B", "C")
    assert edge_triples(result.edges) == [(0, 1, 1), (0, 2, 2)]
    assert result.pre.edges() == (Edge(0, 1, 1),)
    assert result.post.edges() == (Edge(0, 2, 2),)
    assert result.graph.degree(0) == 2


def test_empty_input_gives_empty_graph(write_csv) -> None:
    result = run_pipeline(write_csv("actor_a,actor_b,year\n"))

    assert result.graph.number_of_nodes() == 0
    assert result.graph.number_of_edges() == 0
    assert result.pre.is_empty() and result.post.is_empty()


def test_repeated_runs_give_identical_ids(example_csv: str) -> None:
    first = run_pipeline(example_csv)
    second = run_pipeline(example_csv)

    assert first.index == second.index
    assert first.edges.equals(second.edges)


def test_dataframe_source_with_custom_columns() -> None:
    raw = pd.DataFrame({"c1": ["x", "y"], "c2": ["y", "z"], "anio": [2001, 2003]})
    cfg = PipelineConfig(columns=EventColumns(actor_a="c1", actor_b="c2", year="anio"), threshold=2)

    result = run_pipeline(raw, cfg)

    assert edge_triples(result.edges) == [(0, 1, 1), (1, 2, 3)]
    assert result.post.number_of_edges() == 1


def test_strict_and_lenient(write_csv) -> None:
    path = write_csv("actor_a,actor_b,year\nA,B,2012\nA,C,\n")

    with pytest.raises(DataError):
        run_pipeline(path)

    result = run_pipeline(path, PipelineConfig(strict=False))
    assert result.rows_dropped == 1
    assert result.graph.number_of_edges() == 1


def test_synthetic_run() -> None:
    result = run_synthetic(n=50, m=2, seed=8)

    max_step = int(result.edges["time_step"].max())
    assert result.threshold == (max_step + 1) // 2
    assert result.pre.number_of_edges() + result.post.number_of_edges() == len(result.edges)
    assert result.index.name_of(7) == "7"


def test_saved_edge_list_runs_like_synthetic(tmp_path) -> None:
    edges = generate_ba_edges(n=40, m=2, seed=8)
    path = tmp_path / "ba_0.csv"
    write_edge_list(edges, str(path))

    from_file = run_edge_list(read_edge_list(str(path)))
    simulated = run_synthetic(n=40, m=2, seed=8)

    assert from_file.edges.equals(simulated.edges)
    assert from_file.threshold == simulated.threshold
    assert from_file.pre.edges() == simulated.pre.edges()
    assert from_file.index.name_of(39) == "39"


def test_edge_list_threshold_and_empty_input() -> None:
    edges = pd.DataFrame([(0, 1, 1), (1, 2, 4)], columns=["source", "target", "time_step"])

    result = run_edge_list(edges, threshold=3)
    assert result.pre.edges() == (Edge(0, 1, 1),)
    assert result.post.edges() == (Edge(1, 2, 4),)

    empty = run_edge_list(edges.iloc[0:0])
    assert empty.graph.number_of_nodes() == 0
    assert len(empty.index) == 0


def test_synthetic_uses_threshold_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PREFNET_THRESHOLD", "3")

    result = run_synthetic(n=30, m=1, seed=2, threshold=env_threshold())

    assert result.threshold == 3
    assert max(e.time_step for e in result.pre.edges()) == 2
