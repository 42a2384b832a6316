# src/prefnet/data/survey_prep.py

"""
Join and recode the election-violence survey tables into one flat CSV.

Sources:
    - ECAV  : election violence events (country, Date, Actor1Type, EventViolence)
    - V-Dem : country-year democracy indicators (v2lgqugen, v2x_polyarchy)
    - QoG   : country-year covariates (wdi_gdpcapcur)

Steps:
    1) derive the event year from ECAV's Date column
    2) left-join V-Dem <- QoG <- ECAV on (country, year)
    3) recode Actor1Type -> actor_ord and v2lgqugen -> quota_ord
    4) drop rows with any missing value (named step, count logged)
    5) write a comma-separated file with a header and no index
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
import pandas as pd

from prefnet.data.ingest import check_columns, years_from_dates
from prefnet.errors import SchemaError

logger = logging.getLogger(__name__)

ECAV_COLUMNS = ["country", "Date", "Actor1Type", "EventViolence"]
VDEM_COLUMNS = ["year", "country_name", "v2lgqugen", "v2x_polyarchy"]
QOG_COLUMNS = ["cname", "year", "wdi_gdpcapcur"]

ECAV_DATE_FORMAT = "%Y/%m/%d"

# -99 is ECAV's "unknown" code and becomes missing.
ACTOR_TYPE_LABELS: Dict[int, Optional[str]] = {
    1: "State",
    2: "Citizens",
    3: "Party",
    4: "Armed Group",
    5: "Other",
    -99: None,
}

QUOTA_LABELS: Dict[int, str] = {
    0: "No",
    1: "Yes, no sanct",
    2: "Yes, weak sanct",
    3: "Yes, strong sanct",
    4: "Yes, reserved",
}


@dataclass
class MeasurementResult:
    frame: pd.DataFrame
    rows_joined: int
    rows_dropped: int


def read_table(path: str) -> pd.DataFrame:
    """Read a csv or excel (.xls / .xlsx) table."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Table not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    if ext in (".xls", ".xlsx"):
        return pd.read_excel(path)
    with open(path, "r", encoding="utf-8", newline="") as f:
        return pd.read_csv(f, low_memory=False)


def clean_ecav(ecav: pd.DataFrame) -> pd.DataFrame:
    check_columns(ecav, ECAV_COLUMNS)
    out = ecav[ECAV_COLUMNS].copy()
    if pd.api.types.is_datetime64_any_dtype(out["Date"]):
        # read_excel already parsed the dates
        out["year"] = out["Date"].dt.year.astype("float64")
    else:
        out["year"] = years_from_dates(out["Date"].astype(str), ECAV_DATE_FORMAT)
    return out[["country", "year", "Actor1Type", "EventViolence"]]


def clean_vdem(vdem: pd.DataFrame) -> pd.DataFrame:
    check_columns(vdem, VDEM_COLUMNS)
    return vdem[VDEM_COLUMNS].copy()


def clean_qog(qog: pd.DataFrame) -> pd.DataFrame:
    check_columns(qog, QOG_COLUMNS)
    return qog[QOG_COLUMNS].copy()


def _as_float_year(frame: pd.DataFrame) -> pd.DataFrame:
    # Join keys must share a dtype; ECAV years can be NaN.
    return frame.assign(year=pd.to_numeric(frame["year"], errors="coerce").astype("float64"))


def join_tables(vdem: pd.DataFrame, qog: pd.DataFrame, ecav: pd.DataFrame) -> pd.DataFrame:
    """V-Dem is the spine; QoG and ECAV are left-joined onto it."""
    df = _as_float_year(vdem).merge(
        _as_float_year(qog),
        how="left",
        left_on=["country_name", "year"],
        right_on=["cname", "year"],
    ).drop(columns=["cname"])

    df = df.merge(
        _as_float_year(ecav),
        how="left",
        left_on=["country_name", "year"],
        right_on=["country", "year"],
    ).drop(columns=["country"])
    return df


def recode_categories(df: pd.DataFrame) -> pd.DataFrame:
    """Add actor_ord and quota_ord; codes outside the mappings become missing."""
    check_columns(df, ["Actor1Type", "v2lgqugen"])
    out = df.copy()
    actor = pd.to_numeric(out["Actor1Type"], errors="coerce")
    quota = pd.to_numeric(out["v2lgqugen"], errors="coerce")
    out["actor_ord"] = actor.map(ACTOR_TYPE_LABELS).astype(object)
    out["quota_ord"] = quota.map(QUOTA_LABELS).astype(object)
    return out


def drop_incomplete_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Drop every row with at least one missing value and log how many went."""
    out = df.dropna().reset_index(drop=True)
    dropped = len(df) - len(out)
    logger.info("drop_incomplete_rows: dropped %d of %d row(s)", dropped, len(df))
    return out


def build_measurement_frame(
    ecav: pd.DataFrame,
    vdem: pd.DataFrame,
    qog: pd.DataFrame,
) -> MeasurementResult:
    joined = join_tables(clean_vdem(vdem), clean_qog(qog), clean_ecav(ecav))
    recoded = recode_categories(joined)
    complete = drop_incomplete_rows(recoded)
    if len(complete):
        complete["year"] = complete["year"].astype(np.int64)
    return MeasurementResult(
        frame=complete,
        rows_joined=len(joined),
        rows_dropped=len(joined) - len(complete),
    )


def write_measurement_csv(df: pd.DataFrame, path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    df.to_csv(path, index=False)
    logger.info("wrote %d row(s) to %s", len(df), path)


def prepare_measurement_data(
    ecav_path: str,
    vdem_path: str,
    qog_path: str,
    out_path: Optional[str] = None,
) -> MeasurementResult:
    """Load the three sources, build the flat frame and optionally write it."""
    try:
        result = build_measurement_frame(
            ecav=read_table(ecav_path),
            vdem=read_table(vdem_path),
            qog=read_table(qog_path),
        )
    except SchemaError as exc:
        logger.error("measurement data preparation failed: %s", exc)
        raise

    if out_path is not None:
        write_measurement_csv(result.frame, out_path)
    return result
