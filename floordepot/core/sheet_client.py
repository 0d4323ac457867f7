# floordepot/core/sheet_client.py
"""
Remote store adapter for the Google Sheet.

Keep this client as the ONLY place where Apps Script HTTP calls are made.

Contract with the script:
  GET  {url}?action=read&t=<ms>           -> {"status": "success", "data": [row, ...]}
  POST {url} {"action": "create", "data"}   -> {"status": "success", "action": "create"}
  POST {url} {"action": "update", "id", "data"}
  POST {url} {"action": "delete", "id"}
  any failure                              -> {"status": "error", "message": "..."}

Implementation notes:
  - POST bodies are JSON text sent as text/plain. Apps Script cannot answer
    CORS preflight requests and parses the body whatever the declared type,
    so this keeps the same request shape browsers are limited to.
  - Apps Script replies through a 302 to googleusercontent.com, so
    redirects are followed.
  - No retries. Reads degrade to an empty list, writes raise.
"""

import json
import logging
import secrets
import time
from typing import Any

import httpx

from floordepot.core.errors import (
    InvalidProductIdError,
    StoreNotConfiguredError,
    StoreResponseError,
    StoreTransportError,
)
from floordepot.core.sheet_codec import decode_row, encode_product
from floordepot.schemas.product import Product, ProductFields

logger = logging.getLogger(__name__)

BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

WRITE_HEADERS = {"Content-Type": "text/plain;charset=utf-8"}


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def generate_product_id() -> str:
    """
    Client-side id: base36 millisecond timestamp + random base36 suffix.

    Example: "m2x9k3pq" + "4fz81c0qj2"
    """
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(BASE36_DIGITS) for _ in range(10))
    return timestamp + suffix


def _clean_id(product_id: Any) -> str:
    return str(product_id if product_id is not None else "").strip()


class SheetStoreClient:
    """
    Translates list / create / update / delete into Apps Script calls.

    The endpoint is resolved on every call from `config`, so saving or
    clearing the URL takes effect immediately.
    """

    def __init__(self, config, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._client = httpx.AsyncClient(transport=transport, follow_redirects=True)

    async def aclose(self) -> None:
        await self._client.aclose()

    # ----- Reads -----

    async def list_products(self) -> list[Product]:
        """
        Fetch every product row. Never raises.

        Returns [] when unconfigured or on any transport / parse / store error.
        """
        url = self.config.url
        if not url:
            return []

        try:
            # Timestamp defeats any intermediate cache
            params = {"action": "read", "t": str(int(time.time() * 1000))}
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            body = response.json()

            if not isinstance(body, dict):
                raise ValueError("Unexpected response shape from sheet")
            if body.get("status") == "error":
                raise StoreResponseError(str(body.get("message") or "Unknown store error"))

            rows = body.get("data")
            if not isinstance(rows, list):
                return []

            return [decode_row(row) for row in rows if isinstance(row, dict)]
        except Exception as e:
            logger.error(f"Error fetching products: {e}")
            return []

    # ----- Writes -----

    async def _send(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = self.config.url
        if not url:
            raise StoreNotConfiguredError()

        try:
            response = await self._client.post(
                url,
                content=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                headers=WRITE_HEADERS,
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Error sending to sheet: {e}")
            raise StoreTransportError(
                f"El servidor respondió {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Error sending to sheet: {e}")
            raise StoreTransportError(f"Error de red: {e}") from e
        except ValueError as e:
            logger.error(f"Error sending to sheet: invalid JSON ({e})")
            raise StoreTransportError("Respuesta inválida del script") from e

        if not isinstance(body, dict):
            raise StoreTransportError("Respuesta inválida del script")

        if body.get("status") == "error":
            message = str(body.get("message") or "Error desconocido en el script")
            logger.error(f"Sheet reported error for {payload.get('action')}: {message}")
            raise StoreResponseError(message)

        return body

    async def create_product(self, product: ProductFields) -> Product:
        """
        Append a new row with a fresh id.

        Returns the product as sent (createdAt is assigned by the sheet and
        shows up on the next read).
        """
        product_id = generate_product_id()
        await self._send(
            {
                "action": "create",
                "data": encode_product(product, product_id=product_id),
            }
        )
        return Product(**product.model_dump(), id=product_id)

    async def update_product(self, product_id: str, product: ProductFields) -> None:
        clean_id = _clean_id(product_id)
        if not clean_id:
            raise InvalidProductIdError("ID inválido para actualizar")

        await self._send(
            {
                "action": "update",
                "id": clean_id,
                "data": encode_product(product, product_id=clean_id),
            }
        )

    async def delete_product(self, product_id: str) -> None:
        clean_id = _clean_id(product_id)
        if not clean_id:
            raise InvalidProductIdError("ID inválido para eliminar")

        await self._send({"action": "delete", "id": clean_id})
