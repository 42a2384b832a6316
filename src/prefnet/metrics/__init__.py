from .degree import (
    DegreeSummary,
    degree_histogram,
    degree_map,
    degree_sequence,
    degree_summary,
    top_degree_nodes,
)

__all__ = [
    "DegreeSummary",
    "degree_histogram",
    "degree_map",
    "degree_sequence",
    "degree_summary",
    "top_degree_nodes",
]
