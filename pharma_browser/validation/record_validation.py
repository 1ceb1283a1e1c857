from __future__ import annotations

import logging
from typing import List

from pharma_browser.core.records import RecordSet
from pharma_browser.validation.errors import ValidationError, ValidationIssue


def validate_records(records: RecordSet) -> None:
    """
    Check value ranges of a record set.

    :raises ValidationError: listing every rule that has offending rows.
    """
    frame = records.frame
    issues: List[ValidationIssue] = []

    if frame.empty:
        return

    bad_rank = int((frame["rank"] < 1).sum())
    if bad_rank:
        issues.append(ValidationIssue("rank_below_one", "rank < 1", bad_rank))

    for col in ("estimated_sales", "min_sales", "max_sales"):
        negative = int((frame[col] < 0).sum())
        if negative:
            issues.append(ValidationIssue(f"negative_{col}", f"negative {col}", negative))

    inverted = int((frame["max_sales"] < frame["min_sales"]).sum())
    if inverted:
        issues.append(ValidationIssue("max_below_min", "max_sales < min_sales", inverted))

    if issues:
        raise ValidationError(issues)


def warn_on_invalid_records(records: RecordSet, logger: logging.Logger) -> None:
    """
    Validate a freshly fetched record set and log a warning if it breaks
    any range rule.

    Warn-only: the rows are still shown, the analyst just gets a signal in
    the logs that the estimation output looks off.
    """
    try:
        validate_records(records)
    except ValidationError as e:
        logger.warning(
            "Record set for period %r failed validation: %s",
            records.period,
            e,
        )
