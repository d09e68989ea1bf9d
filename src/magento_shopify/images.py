from __future__ import annotations
from typing import Optional


ABSOLUTE_PREFIXES = ("http://", "https://")


def build_full_image_url(image_path: Optional[str], base_url: Optional[str]) -> str:
    """Resolve a Magento image path against an optional media base URL.

    Absolute URLs pass through untouched. Without a base URL a relative path is
    returned as-is; Shopify will not be able to fetch it, but that is the
    caller's configuration to fix, not a conversion error.
    """
    if not image_path or not image_path.strip():
        return ""
    if image_path.startswith(ABSOLUTE_PREFIXES):
        return image_path
    if not base_url or not base_url.strip():
        return image_path
    base = base_url[:-1] if base_url.endswith("/") else base_url
    path = image_path[1:] if image_path.startswith("/") else image_path
    return f"{base}/{path}"
