from __future__ import annotations
import json
import os
from pathlib import Path
from typing import Dict, Optional

from catalog_import.catalog_client import DEFAULT_BULK_PATH, CatalogConfig


SETTINGS_PATH: Path | None = None


def init_settings(path: Path) -> None:
    global SETTINGS_PATH
    SETTINGS_PATH = path
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        save_settings(default_settings())


def default_settings() -> Dict:
    return {
        "catalog_base_url": "",
        "catalog_token": "",
        "bulk_path": DEFAULT_BULK_PATH,
        # 0 disables the request timeout
        "request_timeout": 0,
        "infer_category": False,
    }


def get_settings() -> Dict:
    assert SETTINGS_PATH is not None
    base = default_settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text())
    except (OSError, ValueError):
        return base
    base.update(data or {})
    return base


def save_settings(data: Dict) -> None:
    assert SETTINGS_PATH is not None
    SETTINGS_PATH.write_text(json.dumps(data, indent=2))


def catalog_config(s: Optional[Dict] = None) -> CatalogConfig:
    """Settings file values, falling back to CATALOG_* environment variables."""
    s = s or get_settings()
    base_url = (s.get("catalog_base_url") or os.getenv("CATALOG_BASE_URL", "")).strip()
    token = (s.get("catalog_token") or os.getenv("CATALOG_TOKEN", "")).strip()
    bulk_path = (s.get("bulk_path") or os.getenv("CATALOG_BULK_PATH", "") or DEFAULT_BULK_PATH).strip()
    timeout = float(s.get("request_timeout") or os.getenv("CATALOG_TIMEOUT", "0") or 0)
    return CatalogConfig(
        base_url=base_url,
        token=token,
        bulk_path=bulk_path,
        timeout=timeout if timeout > 0 else None,
    )
