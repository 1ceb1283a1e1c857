from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import pandas as pd


@dataclass(frozen=True)
class PeriodSummary:
    total_sales: float
    n_countries: int
    n_drugs: int
    n_companies: int


@dataclass(frozen=True)
class CompanySummary:
    """
    Headline numbers for one company's records.

    top_countries / top_categories are (name, summed mean sales) pairs,
    largest first.
    """
    total_sales: float
    top_countries: List[Tuple[str, float]] = field(default_factory=list)
    top_categories: List[Tuple[str, float]] = field(default_factory=list)


@dataclass(frozen=True)
class CountrySummary:
    """Headline numbers for one country: total sales, best categories and companies."""
    total_sales: float
    top_categories: List[Tuple[str, float]] = field(default_factory=list)
    top_companies: List[Tuple[str, float]] = field(default_factory=list)


def period_summary(frame: pd.DataFrame) -> PeriodSummary:
    if frame.empty:
        return PeriodSummary(total_sales=0.0, n_countries=0, n_drugs=0, n_companies=0)
    return PeriodSummary(
        total_sales=float(frame["estimated_sales"].sum()),
        n_countries=int(frame["country_name"].nunique()),
        n_drugs=int(frame["drug_name"].nunique()),
        n_companies=int(frame["company_name"].nunique()),
    )


def _top(frame: pd.DataFrame, by: str, top_n: int) -> List[Tuple[str, float]]:
    totals = (
        frame.groupby(by, sort=False)["estimated_sales"]
        .sum()
        .sort_values(ascending=False, kind="mergesort")
        .head(top_n)
    )
    return [(str(k), float(v)) for k, v in totals.items()]


def company_summary(frame: pd.DataFrame, top_n: int = 5) -> CompanySummary:
    if frame.empty:
        return CompanySummary(total_sales=0.0)
    return CompanySummary(
        total_sales=float(frame["estimated_sales"].sum()),
        top_countries=_top(frame, "country_name", top_n),
        top_categories=_top(frame, "category_name", top_n),
    )


def country_summary(frame: pd.DataFrame, top_n: int = 5) -> CountrySummary:
    if frame.empty:
        return CountrySummary(total_sales=0.0)
    return CountrySummary(
        total_sales=float(frame["estimated_sales"].sum()),
        top_categories=_top(frame, "category_name", top_n),
        top_companies=_top(frame, "company_name", top_n),
    )
