from __future__ import annotations

import numpy as np
import pandas as pd

from pharma_browser.core.filter_state import FilterState
from pharma_browser.core.records import SEARCH_FIELD


def build_mask(frame: pd.DataFrame, state: FilterState) -> np.ndarray:
    """
    Boolean row mask for `state` over `frame`.

    - every constrained field must equal its selection exactly (case-sensitive)
    - the drug name must contain the trimmed search text, case-insensitively
    """
    mask = np.ones(len(frame), dtype=bool)

    for field_name, value in state.selections.items():
        if field_name not in frame.columns:
            # Nothing can match a constraint on a column the table doesn't have
            mask &= False
            continue
        mask &= (frame[field_name] == value).to_numpy(dtype=bool)

    needle = state.search_text
    if needle and len(frame):
        names = frame[SEARCH_FIELD].astype(str).str.lower()
        mask &= names.str.contains(needle, regex=False).to_numpy(dtype=bool)

    return mask


def apply_filters(frame: pd.DataFrame, state: FilterState) -> pd.DataFrame:
    """
    Return the rows of `frame` that satisfy `state`, in their original order.

    An unconstrained state returns `frame` itself.
    """
    if state.is_unconstrained:
        return frame
    return frame[build_mask(frame, state)]
