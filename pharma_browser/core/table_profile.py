from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from pharma_browser.core.period_store import LoadRequest

# Record field -> LoadRequest attribute that scopes a load to one value of it
SCOPE_FIELDS: Dict[str, str] = {
    "company_name": "company",
    "country_name": "country",
}


@dataclass(frozen=True)
class TableProfile:
    """
    Describes one table view built on the shared query engine.

    Fields:

    :param view_id: stable id, also used as the UI id prefix
    :param title: heading shown above the table
    :param filter_fields: record fields that get a filter dropdown, in display order
    :param columns: (record field, header) pairs shown in the table
    :param scope_field: if set, the view loads the records of one value of this
        field per period (one company, one country) and waits until it is chosen
    :param export_filename: format string for the CSV name; receives period,
        company and country
    """
    view_id: str
    title: str
    filter_fields: Tuple[str, ...]
    columns: Tuple[Tuple[str, str], ...]
    scope_field: Optional[str] = None
    export_filename: str = "{period}.csv"

    def __post_init__(self) -> None:
        if self.scope_field is not None and self.scope_field not in SCOPE_FIELDS:
            raise ValueError(f"'{self.scope_field}' cannot scope a table")
        if self.scope_field in self.filter_fields:
            raise ValueError(f"'{self.scope_field}' is both scope and filter of '{self.view_id}'")

    @property
    def is_scoped(self) -> bool:
        return self.scope_field is not None

    @property
    def column_fields(self) -> Tuple[str, ...]:
        return tuple(f for f, _ in self.columns)

    def request_for(self, period: str, scope: Optional[str] = None) -> LoadRequest:
        """The load request for `period`; `scope` is ignored by unscoped views."""
        if self.scope_field is None or not scope:
            return LoadRequest(period=period)
        return LoadRequest(period=period, **{SCOPE_FIELDS[self.scope_field]: scope})

    def filename_for(
        self,
        period: str | None,
        company: str | None = None,
        country: str | None = None,
    ) -> str:
        return self.export_filename.format(
            period=period or "no-period",
            company=company or "all-companies",
            country=country or "all-countries",
        )


DRUG_TABLE = TableProfile(
    view_id="drugs",
    title="Drug Estimation Table",
    filter_fields=("country_name", "category_name", "company_name"),
    columns=(
        ("drug_name", "Drug Name"),
        ("company_name", "Company"),
        ("category_name", "Category"),
        ("country_name", "Country"),
        ("rank", "Rank"),
        ("estimated_sales", "Mean Sales ($)"),
        ("min_sales", "Min Sales ($)"),
        ("max_sales", "Max Sales ($)"),
    ),
    export_filename="drug_estimation_{period}.csv",
)

COMPANY_TABLE = TableProfile(
    view_id="company",
    title="Company Sales Estimation",
    filter_fields=("country_name", "category_name"),
    columns=(
        ("drug_name", "Drug Name"),
        ("country_name", "Country"),
        ("category_name", "Category"),
        ("rank", "Rank"),
        ("estimated_sales", "Mean Sales ($)"),
        ("min_sales", "Min Sales ($)"),
        ("max_sales", "Max Sales ($)"),
    ),
    scope_field="company_name",
    export_filename="{company}_{period}_drug_sales.csv",
)

COUNTRY_TABLE = TableProfile(
    view_id="country",
    title="Country Sales Overview",
    filter_fields=("category_name", "company_name"),
    columns=(
        ("drug_name", "Drug Name"),
        ("company_name", "Company"),
        ("category_name", "Category"),
        ("rank", "Rank"),
        ("estimated_sales", "Mean Sales ($)"),
        ("min_sales", "Min Sales ($)"),
        ("max_sales", "Max Sales ($)"),
    ),
    scope_field="country_name",
    export_filename="{country}_{period}_country_sales.csv",
)

TABLE_PROFILES: Dict[str, TableProfile] = {
    p.view_id: p for p in (DRUG_TABLE, COMPANY_TABLE, COUNTRY_TABLE)
}
