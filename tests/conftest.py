# Shared pytest fixtures
from __future__ import annotations
import os
import tempfile
from pathlib import Path

import pytest

# The server module reads its settings path at import time.
os.environ.setdefault(
    "MAGENTO_SHOPIFY_SETTINGS",
    str(Path(tempfile.mkdtemp(prefix="magento-shopify-")) / "settings.json"),
)


def csv_text(*lines: str) -> str:
    return "\n".join(lines)


@pytest.fixture()
def product_csv() -> str:
    """Two simples folded under a configurable, one standalone simple."""
    return csv_text(
        "sku,product_type,name,description,price,qty,weight,categories,base_image,visibility,product_online,"
        "configurable_variations,configurable_variation_labels",
        'TEE-S,simple,Tee Small,,19.99,5.0000,0.2,,/t/e/tee-s.jpg,"Catalog, Search",1,,',
        'TEE-M,simple,Tee Medium,,"21,50",3,0.25,,,"Catalog, Search",1,,',
        'TEE,configurable,Basic Tee,"<p>Soft, cotton</p>",19.99,0,0,"Default Category/Men/Shirts, Default Category/Sale",'
        '/t/e/tee.jpg,"Catalog, Search",1,"sku=TEE-S,size=S|sku=TEE-M,size=M",size=Size',
        'MUG,simple,Coffee Mug,A mug,7.5,12,0.4,Default Category/Home,https://cdn.example/mug.jpg,"Catalog, Search",1,,',
    )


@pytest.fixture()
def customer_csv() -> str:
    return csv_text(
        "email,firstname,lastname,street,city,postcode,country_id,telephone,_website,group_id",
        "john@example.com,John,Doe,Main St 1,Amsterdam,1000AA,NL,+31612345678,base,1",
        "jane@example.com,Jane,Roe,Side St 2,Rotterdam,2000BB,Netherlands,,,",
    )


@pytest.fixture()
def write_file(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        p = tmp_path / name
        p.write_text(content, encoding="utf-8")
        return p
    return _write
