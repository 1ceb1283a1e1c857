from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from pharma_browser.core.exceptions import RecordSchemaError

# Record attribute -> key used by the results API and in CSV exports
WIRE_NAMES: Dict[str, str] = {
    "drug_name": "drugName",
    "company_name": "companyName",
    "category_name": "categoryName",
    "country_name": "countryName",
    "rank": "rank",
    "estimated_sales": "estimatedSales",
    "min_sales": "minSales",
    "max_sales": "maxSales",
}

RECORD_FIELDS = tuple(WIRE_NAMES)
TEXT_FIELDS = ("drug_name", "company_name", "category_name", "country_name")
NUMERIC_FIELDS = ("rank", "estimated_sales", "min_sales", "max_sales")

# Fields the filter dropdowns can constrain, and the one free-text search reads
FILTERABLE_FIELDS = ("country_name", "category_name", "company_name")
SEARCH_FIELD = "drug_name"


@dataclass(frozen=True)
class Record:
    """
    One sales-estimate row.

    Identity is positional: two records with equal fields are still two rows.
    """
    drug_name: str
    company_name: str
    category_name: str
    country_name: str
    rank: int
    estimated_sales: float
    min_sales: float
    max_sales: float

    @classmethod
    def from_wire(cls, raw: Mapping[str, Any]) -> Record:
        """
        Build a Record from an API/CSV row keyed by wire names.

        :raises RecordSchemaError: if the row is not an object, or a field is
            missing or not coercible.
        """
        if not isinstance(raw, Mapping):
            raise RecordSchemaError(
                f"Record row is not an object (got {type(raw).__name__})"
            )
        values: Dict[str, Any] = {}
        for field_name, wire in WIRE_NAMES.items():
            if wire not in raw or _is_missing(raw[wire]):
                raise RecordSchemaError(f"Record is missing field '{wire}'")
            value = raw[wire]
            try:
                if field_name == "rank":
                    values[field_name] = int(value)
                elif field_name in NUMERIC_FIELDS:
                    values[field_name] = float(value)
                else:
                    values[field_name] = str(value)
            except (TypeError, ValueError):
                raise RecordSchemaError(
                    f"Field '{wire}' has non-numeric value {value!r}"
                ) from None
        return cls(**values)

    def to_wire(self) -> Dict[str, Any]:
        return {WIRE_NAMES[k]: v for k, v in asdict(self).items()}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def empty_frame() -> pd.DataFrame:
    return pd.DataFrame({name: pd.Series(dtype=_dtype(name)) for name in RECORD_FIELDS})


def _dtype(field_name: str) -> str:
    if field_name == "rank":
        return "int64"
    if field_name in NUMERIC_FIELDS:
        return "float64"
    return "object"


def frame_from_records(records: Iterable[Record]) -> pd.DataFrame:
    rows = [asdict(r) for r in records]
    if not rows:
        return empty_frame()
    return pd.DataFrame(rows, columns=list(RECORD_FIELDS)).astype(
        {name: _dtype(name) for name in RECORD_FIELDS}
    )


def frame_from_wire(rows: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Parse wire rows (API JSON objects or CSV dict rows) into a record frame."""
    return frame_from_records(Record.from_wire(row) for row in rows)


class RecordSet:
    """
    The raw record set for one period.

    Wraps an immutable-by-convention DataFrame: nothing in the engine writes to
    `frame`, a new RecordSet is built whenever the period data changes.
    """

    def __init__(
        self,
        period: Optional[str],
        frame: Optional[pd.DataFrame] = None,
        company: Optional[str] = None,
        country: Optional[str] = None,
    ) -> None:
        self.period = period
        self.company = company
        self.country = country
        self.frame = frame if frame is not None else empty_frame()

    @classmethod
    def empty(
        cls,
        period: Optional[str] = None,
        company: Optional[str] = None,
        country: Optional[str] = None,
    ) -> RecordSet:
        return cls(period, empty_frame(), company=company, country=country)

    @classmethod
    def from_wire(
        cls,
        period: str,
        rows: Iterable[Mapping[str, Any]],
        company: Optional[str] = None,
        country: Optional[str] = None,
    ) -> RecordSet:
        return cls(period, frame_from_wire(rows), company=company, country=country)

    def __len__(self) -> int:
        return len(self.frame)

    def records(self) -> List[Record]:
        return records_of(self.frame)

    def __repr__(self) -> str:
        return (
            f"RecordSet(period={self.period!r}, company={self.company!r}, "
            f"country={self.country!r}, n={len(self)})"
        )


def records_of(frame: pd.DataFrame) -> List[Record]:
    """Materialise frame rows back into Record objects (arrival order)."""
    return [
        Record(**{name: row[name] for name in RECORD_FIELDS})
        for row in frame.to_dict("records")
    ]
