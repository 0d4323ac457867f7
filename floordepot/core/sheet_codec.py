# floordepot/core/sheet_codec.py
"""
Decoding / encoding between loosely-typed sheet rows and Product.

The Apps Script returns one JSON object per row with header names
lowercased (`isfeatured`, `createdat`), but older script versions used
camelCase, so both spellings are accepted. Every cell may come back as a
string, number, boolean or empty string; nothing about the row shape is
trusted.
"""

import math
from typing import Any, Mapping

from floordepot.core.formatting import join_image_urls, split_image_urls
from floordepot.schemas.product import Product, ProductFields

TRUTHY_STRINGS = frozenset({"TRUE", "VERDADERO", "SI"})

TEXT_FIELDS = ("name", "category", "format", "finish", "code", "description", "provider")


def to_bool(value: Any) -> bool:
    """
    Multi-encoding truth table used by the sheet.

    True for: True, 1, and the strings TRUE / VERDADERO / SI (any case,
    surrounding blanks ignored). Everything else is False.
    """
    if value is True:
        return True
    if isinstance(value, str):
        return value.strip().upper() in TRUTHY_STRINGS
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 1
    return False


def to_number(value: Any) -> float:
    """Numeric coercion; unparseable, empty or non-finite cells become 0."""
    if value is None or isinstance(value, bool):
        return float(value or 0)
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _pick(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return None


def decode_row(row: Mapping[str, Any]) -> Product:
    """
    Build a strict Product from one sheet row.

    | field                      | coercion                                  |
    |----------------------------|-------------------------------------------|
    | id                         | text, trimmed                             |
    | name, category, ... (text) | text, default ""                          |
    | yield, price, cost         | number, default 0                         |
    | images                     | comma split or list, trimmed, no empties  |
    | isFeatured                 | to_bool                                   |
    | createdAt                  | passthrough                               |
    """
    fields: dict[str, Any] = {name: to_text(row.get(name)) for name in TEXT_FIELDS}

    return Product(
        id=to_text(row.get("id")).strip(),
        yield_m2=to_number(row.get("yield")),
        price=to_number(row.get("price")),
        cost=to_number(row.get("cost")),
        images=split_image_urls(row.get("images")),
        is_featured=to_bool(_pick(row, "isfeatured", "isFeatured")),
        created_at=_pick(row, "createdat", "createdAt"),
        **fields,
    )


def encode_product(product: ProductFields, product_id: str | None = None) -> dict[str, Any]:
    """
    Serialize a product into the `data` object of a create/update request.

    - images  -> "url1,url2"
    - isFeatured -> "TRUE" / "FALSE"
    """
    data: dict[str, Any] = {
        "name": product.name,
        "category": product.category,
        "format": product.format,
        "yield": product.yield_m2,
        "price": product.price,
        "finish": product.finish,
        "code": product.code,
        "description": product.description,
        "images": join_image_urls(product.images),
        "cost": product.cost,
        "provider": product.provider,
        "isFeatured": "TRUE" if product.is_featured else "FALSE",
    }
    if product_id is not None:
        data["id"] = product_id
    return data
