from __future__ import annotations

import csv
import io

import pandas as pd

from pharma_browser.core.export import parse, serialize
from pharma_browser.core.records import WIRE_NAMES, RecordSet


def _make_records() -> RecordSet:
    return RecordSet.from_wire(
        "2024Q1",
        [
            {
                "drugName": "Tagrisso, 80mg", "companyName": 'Astra "Zen" eca',
                "categoryName": "Oncology", "countryName": "Japan", "rank": 13,
                "estimatedSales": 205000000.5, "minSales": 190000000, "maxSales": 220000000,
            },
            {
                "drugName": "Keytruda", "companyName": "Merck", "categoryName": "Oncology",
                "countryName": "United States", "rank": 1,
                "estimatedSales": 6250.25, "minSales": 5900, "maxSales": 6600,
            },
        ],
    )


def test_header_names_every_field():
    text = serialize(_make_records().frame)
    header = text.splitlines()[0].split(",")
    assert header == list(WIRE_NAMES.values())


def test_values_with_delimiter_and_quotes_are_quoted():
    text = serialize(_make_records().frame)
    rows = list(csv.reader(io.StringIO(text)))

    assert rows[1][0] == "Tagrisso, 80mg"
    assert rows[1][1] == 'Astra "Zen" eca'
    assert '"Astra ""Zen"" eca"' in text


def test_export_roundtrip_preserves_records():
    records = _make_records()
    parsed = parse(serialize(records.frame))
    pd.testing.assert_frame_equal(parsed, records.frame)


def test_export_with_other_delimiter():
    records = _make_records()
    text = serialize(records.frame, delimiter=";")
    assert text.splitlines()[0].startswith("drugName;companyName")
    pd.testing.assert_frame_equal(parse(text, delimiter=";"), records.frame)


def test_export_of_empty_set_is_header_only():
    text = serialize(RecordSet.empty("2024Q1").frame)
    assert text.strip() == ",".join(WIRE_NAMES.values())
    assert parse(text).empty


def test_export_does_not_touch_the_frame():
    frame = _make_records().frame
    before = frame.copy()
    serialize(frame, fields=["drug_name", "rank"])
    pd.testing.assert_frame_equal(frame, before)
