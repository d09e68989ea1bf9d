from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from server.app import app


@pytest.fixture()
def client():
    return TestClient(app)


def upload(text: str, name: str = "export.csv"):
    return {"file": (name, text.encode("utf-8"), "text/csv")}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_parse_customers(client, customer_csv):
    r = client.post("/customers/parse", files=upload(customer_csv))
    assert r.status_code == 200
    body = r.json()
    assert body["type"] == "customers_found"
    assert [c["email"] for c in body["customers"]] == ["john@example.com", "jane@example.com"]
    assert body["stats"]["customers_found"] == 2


def test_convert_customers_returns_csv(client, customer_csv):
    r = client.post("/customers/convert", files=upload(customer_csv))
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "shopify_customers.csv" in r.headers["content-disposition"]
    assert r.text.startswith("First Name,Last Name,Email")


def test_convert_customers_rejects_unusable_file(client):
    r = client.post("/customers/convert", files=upload("foo,bar\n1,2"))
    assert r.status_code == 422
    assert "header" in r.json()["detail"]


def test_non_utf8_upload_is_rejected(client):
    r = client.post("/customers/parse", files={"file": ("x.csv", b"\xff\xfe\x00bad", "text/csv")})
    assert r.status_code == 400


def test_export_edited_customers(client):
    payload = [{"first_name": "Ann", "last_name": "Lee", "email": "ann@example.com", "tax_exempt": True}]
    r = client.post("/customers/export", json=payload)
    assert r.status_code == 200
    header, row = r.text.split("\n")
    assert row.startswith("Ann,Lee,ann@example.com")
    assert row.endswith(",yes")


def test_parse_products(client, product_csv):
    r = client.post(
        "/products/parse", files=upload(product_csv), data={"base_image_url": "https://shop.example/media"}
    )
    assert r.status_code == 200
    body = r.json()
    assert body["type"] == "products_found"
    assert [row["handle"] for row in body["rows"]] == ["TEE", "TEE", "MUG"]
    assert [row["is_variant_row"] for row in body["rows"]] == [False, True, False]
    assert body["rows"][1]["product"] is None
    assert body["rows"][0]["variant"]["image_src"] == "https://shop.example/media/t/e/tee-s.jpg"


def test_convert_products(client, product_csv):
    r = client.post("/products/convert", files=upload(product_csv))
    assert r.status_code == 200
    assert r.text.startswith("Handle,Title")
    assert len(r.text.split("\n")) == 4


def test_convert_products_without_sku_column(client):
    r = client.post("/products/convert", files=upload("name,price\nWidget,1"))
    assert r.status_code == 422


def test_parse_then_export_products(client, product_csv):
    rows = client.post("/products/parse", files=upload(product_csv)).json()["rows"]
    rows[0]["product"]["title"] = "Edited Tee"
    r = client.post("/products/export", json=rows)
    assert r.status_code == 200
    lines = r.text.split("\n")
    assert lines[1].startswith("TEE,Edited Tee")
    assert lines[2].startswith("TEE,,")


def test_settings_roundtrip(client):
    r = client.put("/settings", json={"base_image_url": " https://img.example/media ", "max_upload_bytes": 1024})
    assert r.status_code == 200
    assert r.json()["base_image_url"] == "https://img.example/media"
    assert client.get("/settings").json()["max_upload_bytes"] == 1024
    try:
        too_big = "sku\n" + "A\n" * 1024
        assert client.post("/products/parse", files=upload(too_big)).status_code == 413
    finally:
        client.put("/settings", json={"base_image_url": "", "max_upload_bytes": 20 * 1024 * 1024})
