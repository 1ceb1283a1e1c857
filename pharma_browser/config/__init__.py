"""
Config package for pharma_browser.

Responsible for:
- config model (GlobalConfig)
- config I/O helpers (load_global_config)
"""

from .model import GlobalConfig
from .loader import load_global_config

__all__ = ["GlobalConfig", "load_global_config"]
