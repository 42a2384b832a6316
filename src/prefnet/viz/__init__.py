from .layout import compute_layout
from .plots import node_sizes, plot_attachment_curve, plot_degree_histogram, plot_network

__all__ = [
    "compute_layout",
    "node_sizes",
    "plot_attachment_curve",
    "plot_degree_histogram",
    "plot_network",
]
