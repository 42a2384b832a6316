from __future__ import annotations

import pandas as pd
import pytest

from prefnet.config import EventColumns
from prefnet.data.canonical import build_actor_index
from prefnet.data.ingest import assign_time_steps, load_events, select_event_columns
from prefnet.errors import DataError, SchemaError


def test_load_events_keeps_canonical_columns(example_csv: str) -> None:
    events = load_events(example_csv)

    assert list(events.columns) == ["actor_a", "actor_b", "year"]
    assert len(events) == 3
    assert events["actor_a"].tolist() == ["A", "B", "A"]


def test_missing_column_raises_schema_error(write_csv) -> None:
    path = write_csv("actor_a,actor_b,when\nA,B,2012\n")

    with pytest.raises(SchemaError) as err:
        load_events(path)
    assert err.value.missing == ["year"]


def test_file_without_header_raises_schema_error(write_csv) -> None:
    path = write_csv("")

    with pytest.raises(SchemaError):
        load_events(path)


def test_renamed_columns_and_separator(write_csv) -> None:
    path = write_csv("from;to;yr\nX;Y;1999\n")
    cols = EventColumns(actor_a="from", actor_b="to", year="yr")

    events = assign_time_steps(load_events(path, columns=cols, sep=";"))

    assert events.iloc[0].to_dict() == {"actor_a": "X", "actor_b": "Y", "year": 1999, "time_step": 1}


def test_time_step_anchored_at_min_year() -> None:
    raw = pd.DataFrame({"actor_a": ["a", "b", "c"], "actor_b": ["b", "c", "a"], "year": [2015, 2010, 2012]})

    events = assign_time_steps(select_event_columns(raw, EventColumns()))

    assert events["time_step"].tolist() == [6, 1, 3]
    assert events["time_step"].min() == 1
    ordered = events.sort_values("year")
    assert ordered["time_step"].is_monotonic_increasing


def test_non_numeric_year_is_strict_by_default(write_csv) -> None:
    path = write_csv("actor_a,actor_b,year\nA,B,2012\nA,C,abc\n")

    with pytest.raises(DataError) as err:
        assign_time_steps(load_events(path))
    assert err.value.rows == [1]


def test_lenient_mode_drops_invalid_rows(write_csv) -> None:
    path = write_csv("actor_a,actor_b,year\nA,B,2012\nA,C,abc\n,D,2013\nB,C,2014\n")

    events = assign_time_steps(load_events(path), strict=False)

    assert events["actor_a"].tolist() == ["A", "B"]
    assert events["time_step"].tolist() == [1, 3]


def test_fractional_year_is_invalid() -> None:
    raw = pd.DataFrame({"actor_a": ["a"], "actor_b": ["b"], "year": [2012.5]})

    with pytest.raises(DataError):
        assign_time_steps(raw)


def test_year_from_date_column(write_csv) -> None:
    path = write_csv("a,b,Date\nX,Y,2012/05/01\nY,Z,2014/01/31\n")
    cols = EventColumns(actor_a="a", actor_b="b", date="Date")

    events = assign_time_steps(load_events(path, columns=cols))

    assert events["year"].tolist() == [2012, 2014]
    assert events["time_step"].tolist() == [1, 3]


def test_unparseable_date_is_data_error(write_csv) -> None:
    path = write_csv("a,b,Date\nX,Y,not-a-date\n")
    cols = EventColumns(actor_a="a", actor_b="b", date="Date")

    with pytest.raises(DataError):
        assign_time_steps(load_events(path, columns=cols))


def test_header_only_file_gives_empty_table(write_csv) -> None:
    path = write_csv("actor_a,actor_b,year\n")

    events = assign_time_steps(load_events(path))

    assert len(events) == 0
    assert "time_step" in events.columns


@pytest.mark.parametrize("bad_year", ["inf", "-inf", "1e30", "0", "10000"])
def test_out_of_range_year_is_data_error(write_csv, bad_year: str) -> None:
    path = write_csv(f"actor_a,actor_b,year\nA,B,2012\nA,C,{bad_year}\n")

    with pytest.raises(DataError) as err:
        assign_time_steps(load_events(path))
    assert err.value.rows == [1]


@pytest.mark.parametrize("bad_year", ["inf", "1e30"])
def test_out_of_range_year_is_dropped_when_lenient(write_csv, bad_year: str) -> None:
    path = write_csv(f"actor_a,actor_b,year\nA,B,2012\nA,C,{bad_year}\nB,C,2013\n")

    events = assign_time_steps(load_events(path), strict=False)

    assert events["year"].tolist() == [2012, 2013]
    assert events["time_step"].tolist() == [1, 2]


def test_actor_names_that_look_missing_are_kept(write_csv) -> None:
    path = write_csv("actor_a,actor_b,year\nNA,B,2012\nNone,C,2012\nnull,N/A,2013\n")

    events = assign_time_steps(load_events(path))

    assert events["actor_a"].tolist() == ["NA", "None", "null"]
    assert events["actor_b"].tolist() == ["B", "C", "N/A"]
    assert build_actor_index(events).names == ("B", "C", "N/A", "NA", "None", "null")
