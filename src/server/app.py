from __future__ import annotations
import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from fastapi.responses import RedirectResponse, Response
from pydantic import BaseModel

from magento_shopify.customers import generate_shopify_customer_csv, parse_magento_customer_csv
from magento_shopify.models import (
    ContinuationVariantRow,
    CustomerRecord,
    ParentVariantRow,
    ProductDetails,
    ShopifyProductRow,
    Variant,
)
from magento_shopify.transform import generate_shopify_product_csv, parse_magento_product_csv
from . import settings as app_settings


ROOT = Path(__file__).resolve().parents[2]
SETTINGS_FILE = Path(os.getenv("MAGENTO_SHOPIFY_SETTINGS", str(ROOT / "data" / "settings.json")))

log = logging.getLogger(__name__)

app = FastAPI(title="Magento → Shopify API", version="0.1.0")
app_settings.init_settings(SETTINGS_FILE)


class CustomerModel(BaseModel):
    id: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    company: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    province: str = ""
    province_code: str = ""
    country: str = ""
    country_code: str = ""
    zip: str = ""
    phone: str = ""
    accepts_marketing: bool = False
    accepts_sms_marketing: bool = False
    tags: str = ""
    note: str = ""
    tax_exempt: bool = False


class ProductDetailsModel(BaseModel):
    title: str = ""
    body_html: str = ""
    vendor: str = ""
    product_type: str = ""
    tags: str = ""
    seo_title: str = ""
    seo_description: str = ""


class VariantModel(BaseModel):
    sku: str
    price: float = 0.0
    inventory_qty: int = 0
    weight: float = 0.0
    weight_unit: str = "g"
    option1_name: str = "Title"
    option1_value: str = "Default Title"
    image_src: str = ""
    image_position: int = 1
    published: bool = True
    taxable: bool = True
    requires_shipping: bool = True


class ProductRowModel(BaseModel):
    handle: str
    is_variant_row: bool = False
    product: Optional[ProductDetailsModel] = None
    variant: VariantModel


class CustomerParseResponse(BaseModel):
    type: str
    message: str
    customers: List[CustomerModel] = []
    stats: Dict = {}


class ProductParseResponse(BaseModel):
    type: str
    message: str
    rows: List[ProductRowModel] = []
    stats: Dict = {}


class SettingsModel(BaseModel):
    base_image_url: str = ""
    max_upload_bytes: int = 20 * 1024 * 1024


def row_to_model(row: ShopifyProductRow) -> ProductRowModel:
    product = None
    if isinstance(row, ParentVariantRow):
        product = ProductDetailsModel(**asdict(row.product))
    return ProductRowModel(
        handle=row.handle,
        is_variant_row=row.is_variant_row,
        product=product,
        variant=VariantModel(**asdict(row.variant)),
    )


def model_to_row(m: ProductRowModel) -> ShopifyProductRow:
    variant = Variant(**m.variant.model_dump())
    if m.is_variant_row:
        return ContinuationVariantRow(handle=m.handle, variant=variant)
    details = ProductDetails(**m.product.model_dump()) if m.product else ProductDetails()
    return ParentVariantRow(handle=m.handle, product=details, variant=variant)


async def read_upload(file: UploadFile) -> str:
    limit = int(app_settings.get_settings().get("max_upload_bytes") or 0)
    data = await file.read()
    if limit and len(data) > limit:
        raise HTTPException(413, f"file larger than {limit} bytes")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(400, "file is not valid UTF-8 text")


def csv_attachment(text: str, filename: str) -> Response:
    return Response(
        content=text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.get("/")
def root():
    return RedirectResponse(url="/docs", status_code=302)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/settings", response_model=SettingsModel)
def read_settings() -> SettingsModel:
    return SettingsModel(**app_settings.get_settings())


@app.put("/settings", response_model=SettingsModel)
def update_settings(req: SettingsModel) -> SettingsModel:
    cur = app_settings.get_settings()
    cur.update({
        "base_image_url": req.base_image_url.strip(),
        "max_upload_bytes": req.max_upload_bytes,
    })
    app_settings.save_settings(cur)
    return SettingsModel(**cur)


@app.post("/customers/parse", response_model=CustomerParseResponse)
async def parse_customers(file: UploadFile = File(...)):
    result = parse_magento_customer_csv(await read_upload(file))
    log.info("customers/parse %s: %s", file.filename, result.type.value)
    return CustomerParseResponse(
        type=result.type.value,
        message=result.message,
        customers=[CustomerModel(**asdict(c)) for c in result.data],
        stats=result.stats.as_dict() if result.stats else {},
    )


@app.post("/customers/convert")
async def convert_customers(file: UploadFile = File(...)):
    result = parse_magento_customer_csv(await read_upload(file))
    if not result.ok:
        raise HTTPException(422, result.message)
    return csv_attachment(generate_shopify_customer_csv(result.data), "shopify_customers.csv")


@app.post("/customers/export")
def export_customers(customers: List[CustomerModel]):
    records = [CustomerRecord(**c.model_dump()) for c in customers]
    return csv_attachment(generate_shopify_customer_csv(records), "shopify_customers.csv")


@app.post("/products/parse", response_model=ProductParseResponse)
async def parse_products(file: UploadFile = File(...), base_image_url: Optional[str] = Form(None)):
    base = base_image_url if base_image_url is not None else app_settings.get_settings().get("base_image_url")
    result = parse_magento_product_csv(await read_upload(file), base_image_url=base or None)
    log.info("products/parse %s: %s", file.filename, result.type.value)
    return ProductParseResponse(
        type=result.type.value,
        message=result.message,
        rows=[row_to_model(r) for r in result.data],
        stats=result.stats.as_dict() if result.stats else {},
    )


@app.post("/products/convert")
async def convert_products(file: UploadFile = File(...), base_image_url: Optional[str] = Form(None)):
    base = base_image_url if base_image_url is not None else app_settings.get_settings().get("base_image_url")
    result = parse_magento_product_csv(await read_upload(file), base_image_url=base or None)
    if not result.ok:
        raise HTTPException(422, result.message)
    return csv_attachment(generate_shopify_product_csv(result.data), "shopify_products.csv")


@app.post("/products/export")
def export_products(rows: List[ProductRowModel]):
    return csv_attachment(generate_shopify_product_csv(model_to_row(r) for r in rows), "shopify_products.csv")
