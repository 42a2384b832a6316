# scripts/generate_ba_dataset.py

"""
Generate time-stamped Barabási–Albert edge lists.

Creates:
  data/synthetic_graphs/ba/ba_{i}.csv        (source,target,time_step)
  data/synthetic_graphs/ba/ba_{i}.gpickle    (networkx snapshot)

The CSVs have the same shape as the canonical edge list of a real dataset,
so run_pipeline.py --edge-list can analyse them directly.
"""

import argparse
import logging
from pathlib import Path

from tqdm import tqdm

from prefnet.graphs.generators import generate_ba_edges
from prefnet.graphs.io import save_graph_gpickle, write_edge_list
from prefnet.graphs.temporal import TemporalGraph


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def main():
    parser = argparse.ArgumentParser(description="Generate time-stamped BA edge lists.")
    parser.add_argument("--num-graphs", type=int, default=10)
    parser.add_argument("--n", type=int, default=100, help="Number of nodes per graph.")
    parser.add_argument("--m", type=int, default=1, help="Edges to attach per new node.")
    parser.add_argument("--seed", type=int, default=42, help="Seed of the first graph; later graphs use seed+i.")
    parser.add_argument(
        "--base-dir",
        type=str,
        default=None,
        help="Output directory (default: <repo_root>/data/synthetic_graphs/ba)",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    # Figure out repo root = parent of scripts/
    ROOT = Path(__file__).resolve().parents[1]

    if args.base_dir is None:
        base_dir = ROOT / "data" / "synthetic_graphs" / "ba"
    else:
        base_dir = Path(args.base_dir)
    ensure_dir(base_dir)

    print(f"Saving {args.num_graphs} BA graphs under {base_dir} (n={args.n}, m={args.m})")

    for i in tqdm(range(args.num_graphs)):
        edges = generate_ba_edges(n=args.n, m=args.m, seed=args.seed + i)
        write_edge_list(edges, str(base_dir / f"ba_{i}.csv"))
        G = TemporalGraph.from_frame(edges).to_networkx()
        save_graph_gpickle(G, str(base_dir / f"ba_{i}.gpickle"))

    print("\nDone generating BA dataset!")


if __name__ == "__main__":
    main()
