from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pharma_browser.core.exceptions import LoadError
from pharma_browser.core.records import RecordSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadRequest:
    """
    What a table asks its record source for.

    - period: reporting period key, e.g. "2024Q1"
    - company: company scope for the company view, None for the full period
    - country: country scope for the country view, None for the full period
    """
    period: str
    company: Optional[str] = None
    country: Optional[str] = None


@dataclass(frozen=True)
class LoadTicket:
    """Handed out by `PeriodDataStore.begin`; carried back on commit/fail."""
    request: LoadRequest
    seq: int


Fetcher = Callable[[LoadRequest], RecordSet]


class PeriodDataStore:
    """
    Holds the raw record set for the currently selected period.

    Loading is split into begin/commit/fail so that a result which arrives
    after the user has already picked another period can be recognised and
    dropped: a result is committed only if the request it was fetched for is
    still the selected one.

    The store never half-updates. `records` is either the previous good set
    or the new one, and `error` describes the last failed load of the
    selected request (cleared by the next successful commit).
    """

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher
        self._seq = itertools.count(1)
        self._selected: Optional[LoadRequest] = None
        self._loaded: Optional[LoadRequest] = None
        self._records: RecordSet = RecordSet.empty()
        self._error: Optional[LoadError] = None

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------
    @property
    def records(self) -> RecordSet:
        return self._records

    @property
    def selected(self) -> Optional[LoadRequest]:
        return self._selected

    @property
    def loaded(self) -> Optional[LoadRequest]:
        """Request the current `records` belong to (None before first load)."""
        return self._loaded

    @property
    def error(self) -> Optional[LoadError]:
        return self._error

    # -------------------------------------------------------------------------
    # Async-shaped API
    # -------------------------------------------------------------------------
    def begin(self, request: LoadRequest) -> LoadTicket:
        """Select `request` and hand out a ticket for its pending result."""
        if request != self._selected:
            self._error = None
        self._selected = request
        return LoadTicket(request=request, seq=next(self._seq))

    def is_current(self, ticket: LoadTicket) -> bool:
        return ticket.request == self._selected

    def commit(self, ticket: LoadTicket, records: RecordSet) -> bool:
        """
        Install `records` if the ticket's request is still selected.

        :return: True if committed, False if the result was stale and dropped.
        """
        if not self.is_current(ticket):
            logger.info(
                "Discarding stale period result",
                extra={
                    "seq": ticket.seq,
                    "period": ticket.request.period,
                    "company": ticket.request.company,
                    "country": ticket.request.country,
                    "selected_period": getattr(self._selected, "period", None),
                },
            )
            return False

        self._records = records
        self._loaded = ticket.request
        self._error = None
        logger.info(
            "Period records loaded",
            extra={
                "period": ticket.request.period,
                "company": ticket.request.company,
                "country": ticket.request.country,
                "n_records": len(records),
            },
        )
        return True

    def fail(self, ticket: LoadTicket, error: LoadError) -> bool:
        """Record a failed load; the last good record set stays in place."""
        if not self.is_current(ticket):
            logger.debug(
                "Ignoring failure of stale period load",
                extra={"period": ticket.request.period, "error": str(error)},
            )
            return False

        if error.request is None:
            error.request = ticket.request
        self._error = error
        logger.warning(
            "Period load failed; keeping last good records",
            extra={
                "period": ticket.request.period,
                "company": ticket.request.company,
                "country": ticket.request.country,
                "kept_period": getattr(self._loaded, "period", None),
                "error": str(error),
            },
        )
        return True

    # -------------------------------------------------------------------------
    # Synchronous convenience
    # -------------------------------------------------------------------------
    def load(self, request: LoadRequest, *, force: bool = False) -> RecordSet:
        """
        Select and fetch `request`.

        Repeated loads of the request that is already loaded short-circuit
        unless `force` is set. Fetch failures are recorded in `error`, never
        raised.
        """
        if not force and request == self._loaded and request == self._selected:
            return self._records

        ticket = self.begin(request)
        try:
            records = self._fetcher(request)
        except LoadError as e:
            self.fail(ticket, e)
        else:
            self.commit(ticket, records)
        return self._records

    def reload(self) -> RecordSet:
        """Re-fetch the selected request, bypassing the short-circuit."""
        if self._selected is None:
            return self._records
        return self.load(self._selected, force=True)
