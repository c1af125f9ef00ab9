"""Request dependencies shared by the web routers."""

from __future__ import annotations

import os
from pathlib import Path

from fastapi import Depends, HTTPException

from infofind.catalog.store import InfoFileCatalog
from infofind.config import AppConfig, load_config
from infofind.errors import ConfigError

CONFIG_ENV = "INFOFIND_CONFIG"
DATA_DIR_ENV = "INFOFIND_DATA_DIR"


def get_config() -> AppConfig:
    """Configuration named by ``INFOFIND_CONFIG``, or the defaults."""
    data_dir = os.environ.get(DATA_DIR_ENV)
    overrides = {"data_dir": Path(data_dir) if data_dir else None}
    config_path = os.environ.get(CONFIG_ENV)
    if not config_path:
        return AppConfig(**{key: value for key, value in overrides.items() if value is not None})
    try:
        return load_config(Path(config_path), **overrides)
    except ConfigError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def get_catalog(config: AppConfig = Depends(get_config)) -> InfoFileCatalog:
    data_dir = config.resolve_data_dir(Path.cwd())
    if not data_dir.is_dir():
        raise HTTPException(status_code=404, detail=f"Data directory not found: {data_dir}")
    return InfoFileCatalog(
        data_dir,
        sidecar_suffix=config.sidecar_suffix,
        content_suffixes=config.content_suffixes,
    )
