from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pharma_browser.config.model import SOURCE_LOCAL, SOURCES, GlobalConfig
from pharma_browser.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a config directory.

    Expected structure:

        root/
            global.json

    Missing keys fall back to the GlobalConfig defaults; a missing
    global.json falls back to defaults entirely. Two environment variables
    override the file:

    - PHARMA_BROWSER_SOURCE: "api" or "local"
    - PHARMA_BROWSER_API_URL: results API base URL

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises ConfigError: if global.json is unreadable or holds invalid values.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        logger.warning(f"global.json not found at {global_path}; using defaults")
        raw: Dict[str, Any] = {}
    else:
        try:
            with global_path.open() as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read {global_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    defaults = GlobalConfig()

    source = os.getenv("PHARMA_BROWSER_SOURCE") or raw.get("source", defaults.source)
    source = str(source).lower()
    if source not in SOURCES:
        raise ConfigError(f"Unknown record source '{source}', expected one of {SOURCES}")

    api_base_url = os.getenv("PHARMA_BROWSER_API_URL") or raw.get("api_base_url", defaults.api_base_url)

    # Relative data_root is resolved against the config directory
    data_root = _resolve_data_root(root, raw.get("data_root"))
    if source == SOURCE_LOCAL and data_root is None:
        raise ConfigError("'data_root' is required when source is 'local'")

    try:
        page_sizes = tuple(int(s) for s in raw.get("page_sizes", defaults.page_sizes))
        default_page_size = int(raw.get("default_page_size", defaults.default_page_size))
        request_timeout = float(raw.get("request_timeout", defaults.request_timeout))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid numeric setting in {global_path}: {e}") from e

    if not page_sizes or any(s < 1 for s in page_sizes):
        raise ConfigError(f"'page_sizes' must be positive integers, got {page_sizes}")
    if default_page_size not in page_sizes:
        raise ConfigError(
            f"'default_page_size' {default_page_size} must be one of {page_sizes}"
        )

    return GlobalConfig(
        ui_title=raw.get("ui_title", defaults.ui_title),
        source=source,
        api_base_url=str(api_base_url).rstrip("/"),
        data_root=data_root,
        request_timeout=request_timeout,
        page_sizes=page_sizes,
        default_page_size=default_page_size,
    )


def _resolve_data_root(root: Path, data_root_raw: Optional[str]) -> Optional[Path]:
    if data_root_raw is None:
        return None
    data_root_path = Path(data_root_raw)
    if data_root_path.is_absolute():
        return data_root_path
    return (root / data_root_path).resolve()
