from __future__ import annotations

import json
from pathlib import Path

import pytest

from pharma_browser.config.loader import load_global_config
from pharma_browser.config.model import GlobalConfig
from pharma_browser.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv("PHARMA_BROWSER_SOURCE", raising=False)
    monkeypatch.delenv("PHARMA_BROWSER_API_URL", raising=False)


def _write_config(root: Path, **values) -> Path:
    (root / "global.json").write_text(json.dumps(values))
    return root


def test_missing_global_json_uses_defaults(tmp_path):
    cfg = load_global_config(tmp_path)
    assert cfg == GlobalConfig()


def test_values_are_read_from_global_json(tmp_path):
    _write_config(
        tmp_path,
        ui_title="Sales",
        api_base_url="http://backend:9000/api/results/",
        request_timeout=5,
        page_sizes=[10, 20],
        default_page_size=20,
    )

    cfg = load_global_config(tmp_path)

    assert cfg.ui_title == "Sales"
    assert cfg.api_base_url == "http://backend:9000/api/results"
    assert cfg.request_timeout == 5.0
    assert cfg.page_sizes == (10, 20)
    assert cfg.default_page_size == 20


def test_relative_data_root_resolves_against_config_dir(tmp_path):
    _write_config(tmp_path, source="local", data_root="data")
    cfg = load_global_config(tmp_path)
    assert cfg.source == "local"
    assert cfg.data_root == (tmp_path / "data").resolve()


def test_local_source_requires_data_root(tmp_path):
    _write_config(tmp_path, source="local")
    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


def test_env_overrides_file(tmp_path, monkeypatch):
    _write_config(tmp_path, source="local", data_root="data", api_base_url="http://a")
    monkeypatch.setenv("PHARMA_BROWSER_SOURCE", "API")
    monkeypatch.setenv("PHARMA_BROWSER_API_URL", "http://b/")

    cfg = load_global_config(tmp_path)

    assert cfg.source == "api"
    assert cfg.api_base_url == "http://b"


@pytest.mark.parametrize(
    "values",
    [
        {"source": "ftp"},
        {"page_sizes": [10, 25], "default_page_size": 50},
        {"page_sizes": [0, 10]},
        {"request_timeout": "soon"},
    ],
)
def test_invalid_values_raise_config_error(tmp_path, values):
    _write_config(tmp_path, **values)
    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


def test_unparseable_json_raises_config_error(tmp_path):
    (tmp_path / "global.json").write_text("{not json")
    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


def test_non_object_json_raises_config_error(tmp_path):
    (tmp_path / "global.json").write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


def test_shipped_config_is_valid():
    root = Path(__file__).resolve().parents[3] / "config"
    cfg = load_global_config(root)
    assert cfg.source == "local"
    assert (cfg.data_root / "2024Q1.csv").is_file()
