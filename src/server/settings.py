from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict


SETTINGS_PATH: Path | None = None

log = logging.getLogger(__name__)


def init_settings(path: Path) -> None:
    global SETTINGS_PATH
    SETTINGS_PATH = path
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        save_settings(default_settings())


def default_settings() -> Dict:
    return {
        # Prefix for relative Magento image paths, e.g. https://shop.example/media/catalog/product
        "base_image_url": "",
        "max_upload_bytes": 20 * 1024 * 1024,
    }


def get_settings() -> Dict:
    assert SETTINGS_PATH is not None
    try:
        data = json.loads(SETTINGS_PATH.read_text())
    except (OSError, json.JSONDecodeError) as e:
        log.warning("Settings at %s unreadable (%s); using defaults", SETTINGS_PATH, e)
        return default_settings()
    base = default_settings()
    base.update(data or {})
    return base


def save_settings(data: Dict) -> None:
    assert SETTINGS_PATH is not None
    SETTINGS_PATH.write_text(json.dumps(data, indent=2))
