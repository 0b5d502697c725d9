"""Tests for the assetshelf config loader."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from assetshelf.config import DEFAULT_DB_PATH, ConfigError, load_config
from assetshelf.ingest.text import DEFAULT_MAX_TEXT_BYTES
from assetshelf.search.query import DEFAULT_THRESHOLD


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_yaml(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(data), encoding="utf-8")


def _load(tmp_path: Path, global_path: Path | None = None):
    return load_config(
        project_dir=tmp_path,
        global_config_path=global_path or tmp_path / "nonexistent" / "config.yaml",
    )


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


def test_defaults_no_files(tmp_path: Path) -> None:
    cfg = _load(tmp_path)
    assert cfg.catalog.db_path == DEFAULT_DB_PATH
    assert cfg.search.threshold == DEFAULT_THRESHOLD
    assert cfg.search.default_sort == "newest"
    assert cfg.ingest.max_text_bytes == DEFAULT_MAX_TEXT_BYTES
    assert cfg.ingest.decompose_primary is True


# ---------------------------------------------------------------------------
# Layering
# ---------------------------------------------------------------------------


def test_global_overrides_defaults(tmp_path: Path) -> None:
    global_cfg = tmp_path / "global" / "config.yaml"
    _write_yaml(global_cfg, {"search": {"threshold": 0.5}})
    cfg = _load(tmp_path, global_cfg)
    assert cfg.search.threshold == 0.5
    assert cfg.search.default_sort == "newest"


def test_project_overrides_global(tmp_path: Path) -> None:
    global_cfg = tmp_path / "global" / "config.yaml"
    _write_yaml(global_cfg, {"search": {"threshold": 0.5, "default_sort": "name"}})
    _write_yaml(tmp_path / "assetshelf.yaml", {"search": {"threshold": 0.9}})
    cfg = _load(tmp_path, global_cfg)
    assert cfg.search.threshold == 0.9
    assert cfg.search.default_sort == "name"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    (tmp_path / "assetshelf.yaml").write_text("# nothing\n", encoding="utf-8")
    assert _load(tmp_path).catalog.db_path == DEFAULT_DB_PATH


def test_ingest_section(tmp_path: Path) -> None:
    _write_yaml(
        tmp_path / "assetshelf.yaml",
        {"ingest": {"max_text_bytes": 1024, "decompose_primary": False}},
    )
    cfg = _load(tmp_path)
    assert cfg.ingest.max_text_bytes == 1024
    assert cfg.ingest.decompose_primary is False


def test_env_overrides_files(tmp_path: Path, monkeypatch) -> None:
    _write_yaml(tmp_path / "assetshelf.yaml", {"catalog": {"db_path": "file.db"}})
    monkeypatch.setenv("ASSETSHELF_DB", "env.db")
    monkeypatch.setenv("ASSETSHELF_SEARCH_THRESHOLD", "0.4")
    cfg = _load(tmp_path)
    assert cfg.catalog.db_path == "env.db"
    assert cfg.search.threshold == 0.4


# ---------------------------------------------------------------------------
# Errors and warnings
# ---------------------------------------------------------------------------


def test_unknown_key_warns(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "assetshelf.yaml", {"bogus": {}})
    with pytest.warns(UserWarning, match="Unknown config key 'bogus'"):
        _load(tmp_path)


def test_threshold_out_of_range(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "assetshelf.yaml", {"search": {"threshold": 1.5}})
    with pytest.raises(ConfigError, match="threshold"):
        _load(tmp_path)


def test_unknown_sort_order(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "assetshelf.yaml", {"search": {"default_sort": "random"}})
    with pytest.raises(ConfigError, match="default_sort"):
        _load(tmp_path)


def test_negative_max_text_bytes(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "assetshelf.yaml", {"ingest": {"max_text_bytes": -1}})
    with pytest.raises(ConfigError):
        _load(tmp_path)


def test_non_numeric_value(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "assetshelf.yaml", {"search": {"threshold": "high"}})
    with pytest.raises(ConfigError, match="Invalid config value"):
        _load(tmp_path)


def test_non_mapping_file(tmp_path: Path) -> None:
    (tmp_path / "assetshelf.yaml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        _load(tmp_path)


def test_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / "assetshelf.yaml").write_text("search: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="not valid YAML"):
        _load(tmp_path)


def test_bad_env_threshold(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("ASSETSHELF_SEARCH_THRESHOLD", "lots")
    with pytest.raises(ConfigError, match="ASSETSHELF_SEARCH_THRESHOLD"):
        _load(tmp_path)
