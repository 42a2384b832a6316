from __future__ import annotations

import math

import pandas as pd
import pytest

from prefnet.errors import EmptyResultError
from prefnet.estimation.attachment import (
    NewmanEstimator,
    attachment_counts,
    attachment_kernel,
    estimate_alpha,
)
from prefnet.graphs.generators import generate_ba_edges


def star_growth() -> pd.DataFrame:
    # 0-1 at step 1, then nodes 2 and 3 attach to node 0
    return pd.DataFrame(
        [(0, 1, 1), (0, 2, 2), (0, 3, 3)],
        columns=["source", "target", "time_step"],
    )


def test_counts_on_hand_example() -> None:
    observed, expected = attachment_counts(star_growth())

    assert observed == {1: 1.0, 2: 1.0}
    assert expected[1] == pytest.approx(1 + 2 / 3)
    assert expected[2] == pytest.approx(1 / 3)


def test_kernel_and_alpha_on_hand_example() -> None:
    kernel = attachment_kernel(star_growth())
    assert kernel[1] == pytest.approx(0.6)
    assert kernel[2] == pytest.approx(3.0)

    est = NewmanEstimator().estimate(star_growth())
    assert est.alpha == pytest.approx(math.log(5) / math.log(2))
    assert est.curve == pytest.approx({1: 0.2, 2: 1.0})
    assert est.summary["r_squared"] == pytest.approx(1.0)


def test_ba_network_is_roughly_linear() -> None:
    est = estimate_alpha(generate_ba_edges(n=2000, m=2, seed=42))

    assert 0.6 < est.alpha < 1.4
    assert max(est.curve.values()) == pytest.approx(1.0)


def test_too_few_degree_classes() -> None:
    single_step = pd.DataFrame([(0, 1, 1), (2, 3, 1)], columns=["source", "target", "time_step"])

    with pytest.raises(EmptyResultError):
        estimate_alpha(single_step)


def test_custom_estimator_is_used() -> None:
    class Fixed:
        def estimate(self, edges: pd.DataFrame):
            from prefnet.estimation.attachment import AttachmentEstimate

            return AttachmentEstimate(alpha=1.0, curve={1: 1.0})

    assert estimate_alpha(star_growth(), Fixed()).alpha == 1.0


def test_min_degree_classes_validation() -> None:
    with pytest.raises(ValueError):
        NewmanEstimator(min_degree_classes=1)
