from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from pharma_browser.core.paging import ALLOWED_PAGE_SIZES, DEFAULT_PAGE_SIZE

SOURCE_API = "api"
SOURCE_LOCAL = "local"
SOURCES = (SOURCE_API, SOURCE_LOCAL)


@dataclass(frozen=True)
class GlobalConfig:
    """
    Parsed `global.json`.

    - source: where period records come from, "api" (results backend) or
      "local" (one CSV per period under data_root)
    - api_base_url: base of the results API, e.g. http://host:8080/api/results
    - data_root: directory of <period>.csv files for the local source
    - request_timeout: seconds per API request
    - page_sizes / default_page_size: table page size choices
    """
    ui_title: str = "Pharma Sales Browser"
    source: str = SOURCE_API
    api_base_url: str = "http://localhost:8080/api/results"
    data_root: Optional[Path] = None
    request_timeout: float = 20.0
    page_sizes: Tuple[int, ...] = field(default=ALLOWED_PAGE_SIZES)
    default_page_size: int = DEFAULT_PAGE_SIZE
