from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pharma_browser.core.table_session import TableSession

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.\-]+")


@dataclass(frozen=True)
class ExportPayload:
    filename: str
    content: str
    mime_type: str = "text/csv"


class ExportService:
    """
    Turns the filtered rows of a table session into a downloadable CSV.

    Delivery (dcc.Download, clipboard, ...) is up to the caller.
    """

    def export(self, session: TableSession) -> ExportPayload:
        records = session.records
        filename = session.profile.filename_for(records.period, records.company, records.country)
        filename = _UNSAFE_FILENAME_CHARS.sub("_", filename)

        content = session.export_text()
        logger.info(
            "Exported table",
            extra={
                "view_id": session.profile.view_id,
                "period": records.period,
                "filename": filename,
                "n_rows": len(session.filtered),
            },
        )
        return ExportPayload(filename=filename, content=content)
