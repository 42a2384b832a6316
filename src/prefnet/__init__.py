"""Preferential-attachment analysis of dyadic event networks.

This package provides:
- ingestion of dyadic event tables with year -> time-step normalization,
- deterministic actor-name canonicalization and dyad deduplication,
- read-only temporal graph views with pre/post partitions,
- degree statistics, a histogram-based attachment-exponent estimate,
- seeded layouts and matplotlib figures,
- the survey join/recode step behind the measurement CSV.
"""

from .errors import DataError, EmptyResultError, PrefnetError, SchemaError
from .config import EventColumns, PipelineConfig, load_pipeline_config
from .graphs.temporal import Edge, TemporalGraph, partition
from .pipeline import PipelineResult, run_pipeline, run_synthetic

__all__ = [
    "DataError",
    "EmptyResultError",
    "PrefnetError",
    "SchemaError",
    "EventColumns",
    "PipelineConfig",
    "load_pipeline_config",
    "Edge",
    "TemporalGraph",
    "partition",
    "PipelineResult",
    "run_pipeline",
    "run_synthetic",
]
