from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Sequence

from pharma_browser.core.records import FILTERABLE_FIELDS


@dataclass(frozen=True)
class FilterState:
    """
    Represents the current user selection/filters for one table.

    Fields:

    - selections: field name -> the single selected value. A field that is
      absent (or mapped to an empty value by the UI) is unconstrained.
    - search: raw text typed into the drug-name search box. It is trimmed and
      lower-cased when matching, but kept verbatim so the input box can
      round-trip it.

    Instances are immutable; every change returns a new FilterState.
    """

    selections: Mapping[str, str] = field(default_factory=dict)
    search: str = ""

    @property
    def search_text(self) -> str:
        """Search text as used for matching: trimmed and lower-cased."""
        return (self.search or "").strip().lower()

    @property
    def is_unconstrained(self) -> bool:
        return not self.selections and not self.search_text

    def selection(self, field_name: str) -> Optional[str]:
        return self.selections.get(field_name)

    def with_selection(self, field_name: str, value: Optional[str]) -> FilterState:
        """
        Set (or clear, when value is None/"") the selection for one field.

        :raises ValueError: if field_name is not a filterable field.
        """
        if field_name not in FILTERABLE_FIELDS:
            raise ValueError(f"'{field_name}' is not a filterable field")
        selections = dict(self.selections)
        if value is None or value == "":
            selections.pop(field_name, None)
        else:
            selections[field_name] = str(value)
        return replace(self, selections=selections)

    def with_search(self, text: Optional[str]) -> FilterState:
        return replace(self, search=text or "")

    def sanitised(self, domains: Mapping[str, Sequence[str]]) -> FilterState:
        """
        Drop selections whose value is no longer offered by the domain of
        their field. Fields without a domain entry are dropped as well.
        """
        kept = {
            k: v for k, v in self.selections.items()
            if v in set(domains.get(k, ()))
        }
        if len(kept) == len(self.selections):
            return self
        return replace(self, selections=kept)

    def to_dict(self) -> Dict[str, Any]:
        return {"selections": dict(self.selections), "search": self.search}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FilterState:
        state = cls(search=str(data.get("search") or ""))
        for k, v in (data.get("selections") or {}).items():
            state = state.with_selection(k, v)
        return state
