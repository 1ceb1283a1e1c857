from __future__ import annotations

import csv
import io
from typing import Optional, Sequence

import pandas as pd

from pharma_browser.core.records import RECORD_FIELDS, WIRE_NAMES, frame_from_wire


def serialize(
    frame: pd.DataFrame,
    fields: Optional[Sequence[str]] = None,
    delimiter: str = ",",
) -> str:
    """
    Serialise every row of `frame` as delimited text with a header row.

    Headers use the wire names (`drugName`, `estimatedSales`, ...) so an
    export can be fed straight back to `parse` or to the local record source.
    Values containing the delimiter, quotes or newlines are quoted per RFC 4180.
    """
    fields = list(fields or RECORD_FIELDS)
    out = frame.reindex(columns=fields).rename(columns=WIRE_NAMES)
    return out.to_csv(
        index=False,
        sep=delimiter,
        quoting=csv.QUOTE_MINIMAL,
        quotechar='"',
        doublequote=True,
        lineterminator="\n",
    )


def parse(text: str, delimiter: str = ",") -> pd.DataFrame:
    """Read an export produced by `serialize` back into a record frame."""
    raw = pd.read_csv(
        io.StringIO(text),
        sep=delimiter,
        dtype=str,
        keep_default_na=False,
    )
    return frame_from_wire(raw.to_dict("records"))
