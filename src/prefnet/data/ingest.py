# src/prefnet/data/ingest.py

"""
Ingestion and temporal normalization of dyadic event tables.

Each input row names the two sides of an event and a year (or a date the
year is read from). After loading, columns are renamed to the canonical
``actor_a``, ``actor_b``, ``year`` and a ``time_step`` is derived:

    time_step = year - min(year) + 1
"""

import logging
import os
from typing import List, Optional

import numpy as np
import pandas as pd

from prefnet.config import EventColumns
from prefnet.errors import DataError, SchemaError

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS = ["actor_a", "actor_b", "year"]

MIN_YEAR = 1
MAX_YEAR = 9999


def empty_events() -> pd.DataFrame:
    """An event table with the canonical columns and no rows."""
    return pd.DataFrame(
        {
            "actor_a": pd.Series(dtype=object),
            "actor_b": pd.Series(dtype=object),
            "year": pd.Series(dtype=np.int64),
            "time_step": pd.Series(dtype=np.int64),
        }
    )


def _required_columns(columns: EventColumns) -> List[str]:
    year_source = columns.date if columns.date else columns.year
    return [columns.actor_a, columns.actor_b, year_source]


def check_columns(table: pd.DataFrame, required: List[str]) -> None:
    missing = [c for c in required if c not in table.columns]
    if missing:
        raise SchemaError(missing, table.columns)


def years_from_dates(values: pd.Series, date_format: str) -> pd.Series:
    """Extract the calendar year from date strings; unparseable dates become NaN."""
    parsed = pd.to_datetime(values, format=date_format, errors="coerce")
    return parsed.dt.year.astype("float64")


def select_event_columns(raw: pd.DataFrame, columns: EventColumns) -> pd.DataFrame:
    """
    Project a raw table onto the canonical event columns.

    Raises:
        SchemaError: if a required column is absent.
    """
    check_columns(raw, _required_columns(columns))

    if columns.date:
        year = years_from_dates(raw[columns.date], columns.date_format)
    else:
        year = raw[columns.year]

    events = pd.DataFrame(
        {
            "actor_a": raw[columns.actor_a].to_numpy(dtype=object),
            "actor_b": raw[columns.actor_b].to_numpy(dtype=object),
            "year": year.to_numpy(),
        }
    )
    return events


def load_events(
    path: str,
    columns: Optional[EventColumns] = None,
    sep: str = ",",
) -> pd.DataFrame:
    """
    Read a header-bearing delimited file of dyadic events.

    The file handle is held only while pandas materializes the table.
    All columns are read as strings so that actor names such as "007" are
    kept verbatim; the year is validated later by assign_time_steps.

    Returns:
        DataFrame with columns actor_a, actor_b, year (year not yet validated).
    """
    if columns is None:
        columns = EventColumns()

    if not os.path.exists(path):
        raise FileNotFoundError(f"Event file not found: {path}")

    with open(path, "r", encoding="utf-8", newline="") as f:
        try:
            raw = pd.read_csv(
                f,
                sep=sep,
                dtype=str,
                skipinitialspace=True,
                # only empty fields are missing; "NA" or "None" can be actor names
                keep_default_na=False,
                na_values=[""],
            )
        except pd.errors.EmptyDataError:
            # No header row at all
            raise SchemaError(_required_columns(columns), []) from None

    logger.info("loaded %d event rows from %s", len(raw), path)
    return select_event_columns(raw, columns)


def _blank(values: pd.Series) -> pd.Series:
    return values.isna() | (values.astype(str).str.strip() == "")


def invalid_event_rows(events: pd.DataFrame) -> pd.Series:
    """
    Boolean mask of rows that cannot become edges: a missing actor name,
    or a year that is missing, non-numeric, not a whole number or outside
    MIN_YEAR..MAX_YEAR (which also rules out inf and int64 overflow).
    """
    years = pd.to_numeric(events["year"], errors="coerce").astype("float64")
    in_range = np.isfinite(years) & (years >= MIN_YEAR) & (years <= MAX_YEAR)
    bad_year = ~in_range | (np.floor(years) != years)
    return bad_year | _blank(events["actor_a"]) | _blank(events["actor_b"])


def assign_time_steps(events: pd.DataFrame, strict: bool = True) -> pd.DataFrame:
    """
    Validate years and derive the integer time step of each event.

    Args:
        events: Output of load_events / select_event_columns.
        strict:
            True (default): any invalid row raises DataError, since silently
            dropping events changes the network topology.
            False: invalid rows are dropped and the count is logged.

    Returns:
        A new DataFrame with year cast to int64 and a time_step column whose
        minimum is 1. Empty input yields an empty table.
    """
    if len(events) == 0:
        return empty_events()

    events = events.reset_index(drop=True)
    bad = invalid_event_rows(events)

    if bad.any():
        rows = np.flatnonzero(bad.to_numpy()).tolist()
        if strict:
            raise DataError(
                f"{len(rows)} event row(s) have a missing actor or a missing/non-numeric/out-of-range year",
                rows,
            )
        logger.warning(
            "dropping %d of %d event row(s) with a missing actor or invalid year",
            len(rows),
            len(events),
        )
        events = events.loc[~bad].reset_index(drop=True)
        if len(events) == 0:
            return empty_events()

    out = events.copy()
    out["actor_a"] = out["actor_a"].astype(str).str.strip()
    out["actor_b"] = out["actor_b"].astype(str).str.strip()
    out["year"] = pd.to_numeric(out["year"]).astype(np.int64)
    out["time_step"] = out["year"] - out["year"].min() + 1
    return out
