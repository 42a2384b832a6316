# src/prefnet/estimation/attachment.py

"""
Preferential-attachment exponent estimation.

Any object with an ``estimate(edges) -> AttachmentEstimate`` method can act
as the estimator (see AttachmentEstimator). The bundled NewmanEstimator is
the non-parametric relative-rate method, not a maximum-likelihood fit:

    For each time step t after the first:
        N(t-1)   = number of nodes present after step t-1
        n_k(t-1) = number of those nodes with degree k
        M(t)     = number of step-t edge endpoints landing on present nodes
        m_k(t)   = how many of those land on nodes of degree k

    A_k = sum_t m_k(t) / sum_t [ n_k(t-1) * M(t) / N(t-1) ]

    i.e. observed attachments over the count expected if every present node
    were equally likely. alpha is the slope of log A_k against log k
    (least squares weighted by sqrt of the observed attachments).
    alpha ~ 1 means linear preferential attachment, alpha > 1 super-linear.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Protocol, Tuple

import numpy as np
import pandas as pd

from prefnet.data.canonical import EDGE_COLUMNS
from prefnet.errors import EmptyResultError

logger = logging.getLogger(__name__)


@dataclass
class AttachmentEstimate:
    """
    Attributes:
        alpha: Estimated attachment exponent.
        curve: degree k -> relative attachment rate A_k (max normalized to 1).
        summary: Estimator-specific details (fit quality, counts, ...).
    """
    alpha: float
    curve: Dict[int, float]
    summary: Dict[str, Any] = field(default_factory=dict)


class AttachmentEstimator(Protocol):
    def estimate(self, edges: pd.DataFrame) -> AttachmentEstimate:
        ...


def attachment_counts(edges: pd.DataFrame) -> Tuple[Dict[int, float], Dict[int, float]]:
    """
    Observed and uniform-expected attachment counts per degree class.

    Returns:
        (observed, expected): degree k -> sum_t m_k(t), and
        degree k -> sum_t n_k(t-1) * M(t) / N(t-1).
        Nodes enter with their first edge, so only endpoints already present
        before step t count as attachments.
    """
    observed: Dict[int, float] = defaultdict(float)
    expected: Dict[int, float] = defaultdict(float)
    if len(edges) == 0:
        return {}, {}

    ordered = edges[EDGE_COLUMNS].sort_values("time_step", kind="mergesort")
    degree: Counter = Counter()

    for _, step in ordered.groupby("time_step", sort=True):
        pairs = list(zip(step["source"].to_numpy(), step["target"].to_numpy()))

        if degree:
            hits: Counter = Counter()
            for s, t in pairs:
                for node in (int(s), int(t)):
                    k = degree.get(node, 0)
                    if k > 0:
                        hits[k] += 1

            total_hits = sum(hits.values())
            if total_hits:
                present = len(degree)
                for k, n_k in Counter(degree.values()).items():
                    expected[k] += n_k * total_hits / present
                for k, m_k in hits.items():
                    observed[k] += m_k

        for s, t in pairs:
            degree[int(s)] += 1
            degree[int(t)] += 1

    return dict(sorted(observed.items())), dict(sorted(expected.items()))


def attachment_kernel(edges: pd.DataFrame) -> Dict[int, float]:
    """A_k for every degree class with at least one observed attachment."""
    observed, expected = attachment_counts(edges)
    return {
        k: observed[k] / expected[k]
        for k in observed
        if observed[k] > 0 and expected.get(k, 0.0) > 0
    }


class NewmanEstimator:
    """
    Args:
        min_degree_classes: Fewest distinct degrees needed for a fit.
    """

    def __init__(self, min_degree_classes: int = 2):
        if min_degree_classes < 2:
            raise ValueError("min_degree_classes must be at least 2")
        self.min_degree_classes = min_degree_classes

    def estimate(self, edges: pd.DataFrame) -> AttachmentEstimate:
        observed, _ = attachment_counts(edges)
        kernel = attachment_kernel(edges)
        if len(kernel) < self.min_degree_classes:
            raise EmptyResultError(
                f"need at least {self.min_degree_classes} degree classes with "
                f"observed attachments, got {len(kernel)}"
            )

        ks = np.array(list(kernel.keys()), dtype=np.float64)
        a = np.array(list(kernel.values()), dtype=np.float64)
        w = np.sqrt(np.array([observed[k] for k in kernel], dtype=np.float64))
        x, y = np.log(ks), np.log(a)
        slope, intercept = np.polyfit(x, y, deg=1, w=w)

        residual = y - (slope * x + intercept)
        ss_tot = float(((y - y.mean()) ** 2).sum())
        r_squared = 1.0 - float((residual ** 2).sum()) / ss_tot if ss_tot > 0 else 1.0

        a_max = float(a.max())
        curve = {int(k): float(v) / a_max for k, v in kernel.items()}

        logger.info("estimated alpha=%.3f from %d degree classes", slope, len(kernel))
        return AttachmentEstimate(
            alpha=float(slope),
            curve=curve,
            summary={
                "method": "newman",
                "intercept": float(intercept),
                "r_squared": r_squared,
                "degree_classes": len(kernel),
                "attachments": int(sum(observed.values())),
                "time_steps": int(edges["time_step"].nunique()),
            },
        )


def estimate_alpha(edges: pd.DataFrame, estimator: AttachmentEstimator | None = None) -> AttachmentEstimate:
    if estimator is None:
        estimator = NewmanEstimator()
    return estimator.estimate(edges)
