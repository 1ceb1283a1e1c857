from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

from pharma_browser.core.records import FILTERABLE_FIELDS

FilterDomains = Dict[str, List[str]]


def derive_domains(
    frame: pd.DataFrame,
    fields: Sequence[str] = FILTERABLE_FIELDS,
) -> FilterDomains:
    """
    Distinct values per field, in first-seen order.

    Always pass the *raw* period frame here, never a filtered one: the
    dropdowns must keep offering every value of the period regardless of
    what the other filters currently select.
    """
    domains: FilterDomains = {}
    for field_name in fields:
        if field_name not in frame.columns:
            domains[field_name] = []
            continue
        # pd.unique keeps order of appearance
        domains[field_name] = [str(v) for v in pd.unique(frame[field_name])]
    return domains


def domain_options(values: Sequence[str]) -> List[dict]:
    """Dropdown options ({label, value}) for one domain."""
    return [{"label": v, "value": v} for v in values]
