from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from pharma_browser.config.model import GlobalConfig
from pharma_browser.core.table_profile import TableProfile
from pharma_browser.services.export_service import ExportService
from pharma_browser.services.record_source import RecordSource
from pharma_browser.services.session_service import TableSessionManager


@dataclass
class AppConfig:
    """
    Shared state for the Dash app, passed into layout + callback
    registration functions instead of using module-level globals.
    """
    config_root: Path
    global_config: GlobalConfig
    source: RecordSource
    profiles: Dict[str, TableProfile] = field(default_factory=dict)
    periods: List[str] = field(default_factory=list)
    companies: List[str] = field(default_factory=list)
    countries: List[str] = field(default_factory=list)
    default_period: Optional[str] = None

    sessions: Optional[TableSessionManager] = None
    export_service: Optional[ExportService] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.sessions is None:
            raise RuntimeError("AppConfig.sessions must be initialized.")
        if self.export_service is None:
            raise RuntimeError("AppConfig.export_service must be initialized.")
