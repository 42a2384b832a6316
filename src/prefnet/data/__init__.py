from .ingest import load_events, assign_time_steps, select_event_columns
from .canonical import ActorIndex, build_actor_index, canonicalize_edges

__all__ = [
    "load_events",
    "assign_time_steps",
    "select_event_columns",
    "ActorIndex",
    "build_actor_index",
    "canonicalize_edges",
]
