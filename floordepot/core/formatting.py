# floordepot/core/formatting.py
import re
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Iterable
from urllib.parse import quote


# --- Images ---

DIRECT_IMAGE_RE = re.compile(r"\.(jpeg|jpg|gif|png|webp|bmp|svg)$", re.IGNORECASE)

# Matches /d/<ID> and id=<ID> in Drive / Docs share links
DRIVE_ID_RE = re.compile(r"(?:/d/|id=)([a-zA-Z0-9_-]+)")

DRIVE_HOSTS = ("drive.google.com", "docs.google.com")

DRIVE_THUMBNAIL_URL = "https://drive.google.com/thumbnail?id={file_id}&sz=s3000"


def to_direct_image_url(url: str | None) -> str:
    """
    Turn a user-pasted image link into something an <img> tag can load.

    - Links already ending in an image extension are returned trimmed.
    - Google Drive / Docs share links are rewritten to the thumbnail
      endpoint (large size), which serves public files reliably.
    - Anything else is returned trimmed.
    """
    if not url:
        return ""
    trimmed = url.strip()

    if DIRECT_IMAGE_RE.search(trimmed):
        return trimmed

    if any(host in trimmed for host in DRIVE_HOSTS):
        match = DRIVE_ID_RE.search(trimmed)
        if match:
            return DRIVE_THUMBNAIL_URL.format(file_id=match.group(1))

    return trimmed


def split_image_urls(value: Any) -> list[str]:
    """
    Normalize the images field into a list of trimmed, non-empty URLs.

    Accepts a comma-separated string (sheet/wire form) or any list/tuple.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(",")
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def join_image_urls(urls: Iterable[str]) -> str:
    """Serialize images to the single comma-joined string the sheet stores."""
    return ",".join(urls)


# --- Currency ---

def format_currency(amount: float | int | None) -> str:
    """
    Format an amount as Chilean pesos (es-CL, CLP, no decimals).

    Examples:
        1234      -> "$1.234"
        1234567.5 -> "$1.234.568"
        -990      -> "-$990"
    """
    try:
        value = Decimal(str(amount if amount is not None else 0))
    except InvalidOperation:
        value = Decimal(0)
    if not value.is_finite():
        value = Decimal(0)

    rounded = int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    grouped = f"{abs(rounded):,}".replace(",", ".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}${grouped}"


# --- Contact ---

WHATSAPP_URL = "https://wa.me/{phone}?text={text}"


def whatsapp_link(phone: str, product_name: str, product_code: str | None) -> str:
    """Build the wa.me deep link used by the public product detail."""
    message = (
        f"Hola, estoy interesado en el producto: {product_name} "
        f"(Código: {product_code or '-'})"
    )
    return WHATSAPP_URL.format(phone=phone, text=quote(message, safe=""))
