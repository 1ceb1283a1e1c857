from __future__ import annotations

import pytest

from pharma_browser.core.exceptions import LoadError, RecordSchemaError
from pharma_browser.core.records import (
    RECORD_FIELDS,
    Record,
    RecordSet,
    frame_from_wire,
)


def _wire_row(**overrides):
    row = {
        "drugName": "Keytruda",
        "companyName": "Merck",
        "categoryName": "Oncology",
        "countryName": "Germany",
        "rank": 2,
        "estimatedSales": 910.5,
        "minSales": 850,
        "maxSales": "970",
    }
    row.update(overrides)
    return row


def test_record_from_wire_coerces_types():
    rec = Record.from_wire(_wire_row())

    assert rec.drug_name == "Keytruda"
    assert rec.rank == 2
    assert rec.min_sales == 850.0
    assert rec.max_sales == 970.0
    assert rec.to_wire()["estimatedSales"] == 910.5


def test_record_from_wire_missing_field_raises_schema_error():
    row = _wire_row()
    del row["countryName"]

    with pytest.raises(RecordSchemaError, match="countryName"):
        Record.from_wire(row)


def test_record_from_wire_non_numeric_is_a_load_error():
    with pytest.raises(LoadError):
        Record.from_wire(_wire_row(estimatedSales="lots"))


@pytest.mark.parametrize("row", [None, 42, "Keytruda", ["Keytruda", "Merck"]])
def test_record_from_wire_rejects_rows_that_are_not_objects(row):
    with pytest.raises(RecordSchemaError, match="not an object"):
        Record.from_wire(row)


def test_frame_from_wire_reports_a_null_row_among_good_ones():
    with pytest.raises(RecordSchemaError):
        frame_from_wire([_wire_row(), None])


def test_frame_from_wire_keeps_arrival_order_and_columns():
    frame = frame_from_wire([_wire_row(drugName="B"), _wire_row(drugName="A")])

    assert list(frame.columns) == list(RECORD_FIELDS)
    assert list(frame["drug_name"]) == ["B", "A"]
    assert frame["rank"].dtype == "int64"


def test_empty_record_set_has_all_columns():
    rs = RecordSet.empty("2024Q1")

    assert len(rs) == 0
    assert list(rs.frame.columns) == list(RECORD_FIELDS)
    assert rs.records() == []


def test_record_set_records_roundtrip():
    rows = [_wire_row(), _wire_row(countryName="Japan", rank=7)]
    rs = RecordSet.from_wire("2024Q1", rows)

    records = rs.records()
    assert [r.country_name for r in records] == ["Germany", "Japan"]
    assert records[1] == Record.from_wire(rows[1])
