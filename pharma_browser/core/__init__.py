"""
Core domain layer: record model, period store, filter/sort/page engine
and the table session that wires them together
"""

from .filter_state import FilterState
from .paging import PageState, PageWindow, SortState
from .period_store import LoadRequest, PeriodDataStore
from .records import Record, RecordSet
from .table_profile import TableProfile
from .table_session import TableSession

__all__ = [
    "FilterState",
    "LoadRequest",
    "PageState",
    "PageWindow",
    "PeriodDataStore",
    "Record",
    "RecordSet",
    "SortState",
    "TableProfile",
    "TableSession",
]
