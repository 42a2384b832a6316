# src/prefnet/data/canonical.py

"""
Actor-name canonicalization and dyad deduplication.

Names from both dyad columns share one mapping. IDs are dense (0..n-1) and
assigned in sorted lexicographic order of the distinct names, so the same
input always yields the same IDs.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from prefnet.errors import DataError

logger = logging.getLogger(__name__)

EDGE_COLUMNS = ["source", "target", "time_step"]
SELF_LOOP_POLICIES = ("drop", "error")


@dataclass(frozen=True)
class ActorIndex:
    """
    Bijection between actor names and integer IDs.

    Attributes:
        names: Distinct names in ID order (names[i] has ID i).
    """
    names: Tuple[str, ...]
    _ids: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_ids", {name: i for i, name in enumerate(self.names)})

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: str) -> bool:
        return name in self._ids

    def id_of(self, name: str) -> int:
        return self._ids[name]

    def name_of(self, actor_id: int) -> str:
        return self.names[actor_id]

    def as_dict(self) -> Dict[str, int]:
        return dict(self._ids)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"id": np.arange(len(self.names), dtype=np.int64), "name": list(self.names)})

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ActorIndex":
        return cls(tuple(sorted(set(names))))


def build_actor_index(events: pd.DataFrame) -> ActorIndex:
    """Index over the union of the actor_a and actor_b columns."""
    names = pd.concat([events["actor_a"], events["actor_b"]], ignore_index=True)
    return ActorIndex.from_names(names.astype(str).str.strip())


def empty_edges() -> pd.DataFrame:
    return pd.DataFrame({c: pd.Series(dtype=np.int64) for c in EDGE_COLUMNS})


def canonicalize_edges(
    events: pd.DataFrame,
    index: Optional[ActorIndex] = None,
    directed: bool = False,
    self_loops: str = "drop",
) -> pd.DataFrame:
    """
    Map the dyads of a normalized event table to (source, target, time_step).

    Args:
        events: Table with actor_a, actor_b and time_step columns.
        index: Mapping to use; built from events when None.
        directed:
            When False, (a, b) and (b, a) are the same dyad and each edge is
            stored as (min, max) before duplicates are removed.
        self_loops: "drop" removes a == b rows (count logged); "error" raises.

    Returns:
        New int64 DataFrame sorted by (time_step, source, target) with no
        duplicate dyads within a time step.
    """
    if self_loops not in SELF_LOOP_POLICIES:
        raise ValueError(f"Unknown self_loops policy: {self_loops}")

    if len(events) == 0:
        return empty_edges()

    if index is None:
        index = build_actor_index(events)

    ids = index.as_dict()
    src = events["actor_a"].astype(str).str.strip().map(ids)
    dst = events["actor_b"].astype(str).str.strip().map(ids)
    if src.isna().any() or dst.isna().any():
        unknown = np.flatnonzero((src.isna() | dst.isna()).to_numpy()).tolist()
        raise DataError("actor name(s) not present in the actor index", unknown)

    edges = pd.DataFrame(
        {
            "source": src.to_numpy(dtype=np.int64),
            "target": dst.to_numpy(dtype=np.int64),
            "time_step": events["time_step"].to_numpy(dtype=np.int64),
        }
    )

    loops = edges["source"] == edges["target"]
    if loops.any():
        if self_loops == "error":
            raise DataError("self-loop dyad(s) found", np.flatnonzero(loops.to_numpy()).tolist())
        logger.warning("dropping %d self-loop dyad(s)", int(loops.sum()))
        edges = edges.loc[~loops]

    if not directed:
        lo = np.minimum(edges["source"].to_numpy(), edges["target"].to_numpy())
        hi = np.maximum(edges["source"].to_numpy(), edges["target"].to_numpy())
        edges = edges.assign(source=lo, target=hi)

    before = len(edges)
    edges = edges.drop_duplicates(subset=EDGE_COLUMNS)
    if len(edges) < before:
        logger.info("removed %d duplicate dyad(s)", before - len(edges))

    return edges.sort_values(EDGE_COLUMNS, kind="mergesort").reset_index(drop=True)


def edge_triples(edges: pd.DataFrame) -> List[Tuple[int, int, int]]:
    """Plain (source, target, time_step) tuples, in frame order."""
    return [
        (int(s), int(t), int(ts))
        for s, t, ts in edges[EDGE_COLUMNS].itertuples(index=False, name=None)
    ]
