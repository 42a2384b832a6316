from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_PALETTE = ("#1f77b4", "#d62728")


@dataclass(slots=True)
class EventColumns:
    actor_a: str = "actor_a"
    actor_b: str = "actor_b"
    year: str = "year"
    # When set, the year is derived from this date column instead.
    date: str | None = None
    date_format: str = "%Y/%m/%d"


@dataclass(slots=True)
class PipelineConfig:
    columns: EventColumns = field(default_factory=EventColumns)
    sep: str = ","
    threshold: int = 5
    strict: bool = True
    directed: bool = False
    self_loops: str = "drop"
    layout_seed: int = 42
    palette: tuple[str, ...] = DEFAULT_PALETTE


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def env_threshold() -> int | None:
    """PREFNET_THRESHOLD when set, else None."""
    value = os.getenv("PREFNET_THRESHOLD")
    return int(value) if value else None


def load_pipeline_config() -> PipelineConfig:
    threshold = env_threshold()
    date_col = os.getenv("PREFNET_DATE_COLUMN") or None
    palette = os.getenv("PREFNET_PALETTE")
    return PipelineConfig(
        columns=EventColumns(
            actor_a=os.getenv("PREFNET_ACTOR_A_COLUMN", "actor_a"),
            actor_b=os.getenv("PREFNET_ACTOR_B_COLUMN", "actor_b"),
            year=os.getenv("PREFNET_YEAR_COLUMN", "year"),
            date=date_col,
            date_format=os.getenv("PREFNET_DATE_FORMAT", "%Y/%m/%d"),
        ),
        sep=os.getenv("PREFNET_SEP", ","),
        threshold=threshold if threshold is not None else 5,
        strict=_env_bool("PREFNET_STRICT", "true"),
        directed=_env_bool("PREFNET_DIRECTED", "false"),
        self_loops=os.getenv("PREFNET_SELF_LOOPS", "drop"),
        layout_seed=int(os.getenv("PREFNET_LAYOUT_SEED", "42")),
        palette=tuple(p.strip() for p in palette.split(",")) if palette else DEFAULT_PALETTE,
    )
