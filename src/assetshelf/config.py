"""assetshelf configuration loader.

Priority (high → low):
  1. CLI flags           (handled at call site — not in this module)
  2. Environment variables  (ASSETSHELF_DB, ASSETSHELF_SEARCH_THRESHOLD)
  3. Per-project assetshelf.yaml  (current directory)
  4. Global ~/.assetshelf/config.yaml
  5. Hardcoded defaults

All YAML reads use yaml.safe_load() — never yaml.load().
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from assetshelf.ingest.text import DEFAULT_MAX_TEXT_BYTES
from assetshelf.search.facets import SORT_ORDERS
from assetshelf.search.query import DEFAULT_THRESHOLD

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_GLOBAL_CONFIG_DIR: Path = Path.home() / ".assetshelf"
_GLOBAL_CONFIG_PATH: Path = _GLOBAL_CONFIG_DIR / "config.yaml"
_PROJECT_CONFIG_NAME: str = "assetshelf.yaml"

DEFAULT_DB_PATH = ".assetshelf.db"

# Known top-level sections — unknown keys produce a warning
_KNOWN_SECTIONS: frozenset[str] = frozenset(["catalog", "search", "ingest"])


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file contains an invalid value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class CatalogCfg:
    """Catalog storage (assetshelf.yaml: catalog:)."""

    db_path: str = DEFAULT_DB_PATH


@dataclass
class SearchCfg:
    """Query engine settings (assetshelf.yaml: search:).

    Attributes:
        threshold: Minimum fuzzy similarity in [0, 1] for a search hit.
        default_sort: Order applied to unranked listings (see SORT_ORDERS).
    """

    threshold: float = DEFAULT_THRESHOLD
    default_sort: str = "newest"


@dataclass
class IngestCfg:
    """Archive extraction settings (assetshelf.yaml: ingest:).

    Attributes:
        max_text_bytes: Generic entries larger than this are not decoded as text.
        decompose_primary: Split the first JSON document into sections/modules.
    """

    max_text_bytes: int = DEFAULT_MAX_TEXT_BYTES
    decompose_primary: bool = True


@dataclass
class AssetshelfConfig:
    """Root configuration object, built by load_config() from merged YAML layers."""

    catalog: CatalogCfg = field(default_factory=CatalogCfg)
    search: SearchCfg = field(default_factory=SearchCfg)
    ingest: IngestCfg = field(default_factory=IngestCfg)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_SECTIONS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=4,
            )


def _validate(cfg: AssetshelfConfig) -> None:
    if not 0.0 <= cfg.search.threshold <= 1.0:
        raise ConfigError(
            f"search.threshold must be between 0 and 1, got {cfg.search.threshold}"
        )
    if cfg.search.default_sort not in SORT_ORDERS:
        raise ConfigError(
            f"search.default_sort must be one of {', '.join(SORT_ORDERS)}, "
            f"got '{cfg.search.default_sort}'"
        )
    if cfg.ingest.max_text_bytes < 0:
        raise ConfigError("ingest.max_text_bytes must be >= 0")
    if not cfg.catalog.db_path:
        raise ConfigError("catalog.db_path must not be empty")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file '{path}' is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping at the top level.")
    return data


# ---------------------------------------------------------------------------
# Merge + build
# ---------------------------------------------------------------------------


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict that is *base* deep-merged with *override*."""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _cfg_from_dict(data: dict[str, Any]) -> AssetshelfConfig:
    """Build an *AssetshelfConfig* from a merged raw YAML dict."""
    cfg = AssetshelfConfig()

    try:
        if "catalog" in data:
            c = data["catalog"] or {}
            cfg.catalog = CatalogCfg(db_path=str(c.get("db_path", cfg.catalog.db_path)))

        if "search" in data:
            s = data["search"] or {}
            cfg.search = SearchCfg(
                threshold=float(s.get("threshold", cfg.search.threshold)),
                default_sort=str(s.get("default_sort", cfg.search.default_sort)),
            )

        if "ingest" in data:
            i = data["ingest"] or {}
            cfg.ingest = IngestCfg(
                max_text_bytes=int(i.get("max_text_bytes", cfg.ingest.max_text_bytes)),
                decompose_primary=bool(
                    i.get("decompose_primary", cfg.ingest.decompose_primary)
                ),
            )
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigError(f"Invalid config value: {exc}") from exc

    return cfg


def _apply_env_overrides(cfg: AssetshelfConfig) -> AssetshelfConfig:
    """Apply ASSETSHELF_* environment variable overrides (layer 2)."""
    if db_path := os.environ.get("ASSETSHELF_DB"):
        cfg.catalog.db_path = db_path
    if threshold := os.environ.get("ASSETSHELF_SEARCH_THRESHOLD"):
        try:
            cfg.search.threshold = float(threshold)
        except ValueError as exc:
            raise ConfigError(
                f"ASSETSHELF_SEARCH_THRESHOLD must be a number, got '{threshold}'"
            ) from exc
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    project_dir: Path | None = None,
    *,
    global_config_path: Path | None = None,
) -> AssetshelfConfig:
    """Load and return a merged *AssetshelfConfig*.

    Applies layers in order: global → per-project → env vars.
    CLI flag overrides must be applied by the caller after this function.

    Args:
        project_dir: Directory to search for *assetshelf.yaml*. Defaults to CWD.
        global_config_path: Override the global config path (for testing).

    Returns:
        Fully merged *AssetshelfConfig* with env var overrides applied.

    Raises:
        ConfigError: If a file is not a YAML mapping or a value is out of range.
    """
    global_path = global_config_path if global_config_path is not None else _GLOBAL_CONFIG_PATH
    search_dir = project_dir if project_dir is not None else Path.cwd()

    merged: dict[str, Any] = {}

    # Layer 1: global config
    if global_path.exists():
        raw_global = _read_yaml(global_path)
        _warn_unknown_keys(raw_global, global_path)
        merged = _deep_merge(merged, raw_global)

    # Layer 2: per-project config
    project_cfg_path = search_dir / _PROJECT_CONFIG_NAME
    if project_cfg_path.exists():
        raw_project = _read_yaml(project_cfg_path)
        _warn_unknown_keys(raw_project, project_cfg_path)
        merged = _deep_merge(merged, raw_project)

    cfg = _cfg_from_dict(merged)

    # Layer 3: env var overrides
    cfg = _apply_env_overrides(cfg)

    _validate(cfg)
    return cfg
