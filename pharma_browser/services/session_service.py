from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Dict, Mapping, Sequence, Tuple

from pharma_browser.core.paging import ALLOWED_PAGE_SIZES, DEFAULT_PAGE_SIZE
from pharma_browser.core.period_store import Fetcher, PeriodDataStore
from pharma_browser.core.table_profile import TableProfile
from pharma_browser.core.table_session import TableSession

logger = logging.getLogger(__name__)


class TableSessionManager:
    """
    Owns the server-side TableSession of every (browser session, view) pair.

    Sessions are created lazily on first access, each with its own
    PeriodDataStore, and evicted least-recently-used once more than
    MAX_SESSIONS are alive.
    """

    MAX_SESSIONS = 256

    def __init__(
        self,
        fetcher: Fetcher,
        profiles: Mapping[str, TableProfile],
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        page_sizes: Sequence[int] = ALLOWED_PAGE_SIZES,
    ) -> None:
        self._fetcher = fetcher
        self._profiles: Dict[str, TableProfile] = dict(profiles)
        self._page_size = page_size
        self._page_sizes = tuple(page_sizes)
        self._sessions: "OrderedDict[Tuple[str, str], TableSession]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str, view_id: str) -> TableSession:
        """
        Return the session for (session_id, view_id), creating it if needed.

        :raises KeyError: if view_id has no registered profile.
        """
        key = (session_id, view_id)
        session = self._sessions.get(key)
        if session is not None:
            self._sessions.move_to_end(key)
            return session

        try:
            profile = self._profiles[view_id]
        except KeyError:
            raise KeyError(f"Unknown table view '{view_id}'") from None

        session = TableSession(
            PeriodDataStore(self._fetcher),
            profile,
            page_size=self._page_size,
            page_sizes=self._page_sizes,
        )
        self._sessions[key] = session
        logger.debug("Created table session", extra={"session_id": session_id, "view_id": view_id})

        # Prevent unbounded growth
        while len(self._sessions) > self.MAX_SESSIONS:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Evicted table session", extra={"session_id": evicted[0], "view_id": evicted[1]})

        return session

    def discard(self, session_id: str) -> None:
        """Drop every view session belonging to session_id."""
        for key in [k for k in self._sessions if k[0] == session_id]:
            del self._sessions[key]
