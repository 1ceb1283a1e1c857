from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pharma_browser.core.period_store import LoadRequest


class PharmaBrowserError(Exception):
    """Base exception for all pharma_browser errors"""
    pass

class ConfigError(PharmaBrowserError):
    """Invalid or inconsistent global.json / environment config"""
    pass

class LoadError(PharmaBrowserError):
    """
    The record set for a period could not be retrieved.
    Recoverable: the store keeps its last good record set.
    """

    def __init__(self, message: str, request: Optional["LoadRequest"] = None):
        super().__init__(message)
        self.message = message
        self.request = request

class RecordSchemaError(LoadError):
    """
    A payload row could not be turned into a Record
    (missing field, non-numeric sales, etc)
    """
    pass
