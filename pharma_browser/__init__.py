"""
Top-level package for the pharma sales browser.

This package exposes the core architecture (query engine, services, UI adapters).
Most code should import from submodules such as:
    pharma_browser.core
    pharma_browser.services
    pharma_browser.ui
"""

__all__: list[str] = []
