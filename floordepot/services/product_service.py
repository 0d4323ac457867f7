# floordepot/services/product_service.py
import logging

from fastapi import HTTPException, status

from floordepot.core.errors import (
    InvalidProductIdError,
    StoreError,
    StoreNotConfiguredError,
    StoreResponseError,
    StoreTransportError,
)
from floordepot.core.formatting import whatsapp_link
from floordepot.core.sheet_client import SheetStoreClient
from floordepot.schemas.product import (
    FILTER_ALL,
    FILTER_FEATURED,
    Product,
    ProductCreate,
    ProductUpdate,
)
from floordepot.services.catalog_sync import CatalogSync

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic for the catalog and the admin panel.

    Responsibilities:
      - public filtering (featured / all / category) and search
      - admin writes through the sheet adapter, followed by a
        foreground refresh of the in-memory catalog
      - mapping store failures to HTTP errors that name the cause
    """

    def __init__(self, client: SheetStoreClient, sync: CatalogSync):
        self.client = client
        self.sync = sync

    # ----- Helpers -----

    @staticmethod
    def _matches_category(product: Product, category: str) -> bool:
        if category == FILTER_ALL:
            return True
        if category == FILTER_FEATURED:
            return product.is_featured
        return product.category == category

    @staticmethod
    def _raise_for_store_error(action: str, exc: StoreError) -> None:
        """
        Translate adapter errors into HTTPException.

        - not configured      -> 503
        - invalid id          -> 400
        - id not found        -> 404
        - store-reported      -> 400
        - network / HTTP / body -> 502
        """
        detail = f"Error al {action}: {exc.message}"
        if isinstance(exc, StoreNotConfiguredError):
            code = status.HTTP_503_SERVICE_UNAVAILABLE
        elif isinstance(exc, InvalidProductIdError):
            code = status.HTTP_400_BAD_REQUEST
        elif isinstance(exc, StoreResponseError):
            code = (
                status.HTTP_404_NOT_FOUND
                if exc.is_not_found
                else status.HTTP_400_BAD_REQUEST
            )
        elif isinstance(exc, StoreTransportError):
            code = status.HTTP_502_BAD_GATEWAY
        else:
            code = status.HTTP_500_INTERNAL_SERVER_ERROR
        raise HTTPException(status_code=code, detail=detail) from exc

    # ----- Reads -----

    def filter_public(
        self,
        products: list[Product],
        category: str = FILTER_FEATURED,
        search: str = "",
    ) -> list[Product]:
        """
        Storefront listing.

        - category: DESTACADOS (featured only, default), TODOS or a category name
        - search: case-insensitive substring of name or code
        """
        term = (search or "").lower()
        return [
            p
            for p in products
            if self._matches_category(p, category)
            and (term in (p.name or "").lower() or term in (p.code or "").lower())
        ]

    def filter_admin(
        self,
        products: list[Product],
        category: str = FILTER_ALL,
    ) -> list[Product]:
        if category == FILTER_ALL:
            return list(products)
        return [p for p in products if p.category == category]

    def get_product(self, products: list[Product], product_id: str) -> Product:
        clean_id = (product_id or "").strip()
        for product in products:
            if product.id == clean_id:
                return product
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    def contact_link(self, product: Product, phone: str) -> str:
        return whatsapp_link(phone, product.name, product.code)

    # ----- Writes -----

    async def create_product(self, payload: ProductCreate) -> Product:
        try:
            product = await self.client.create_product(payload)
        except StoreError as e:
            self._raise_for_store_error("guardar", e)
        logger.info(f"Product created: {product.id}")
        await self.sync.refresh(background=False)
        return product

    async def update_product(self, product_id: str, payload: ProductUpdate) -> None:
        try:
            await self.client.update_product(product_id, payload)
        except StoreError as e:
            self._raise_for_store_error("guardar", e)
        logger.info(f"Product updated: {product_id}")
        await self.sync.refresh(background=False)

    async def delete_product(self, product_id: str) -> None:
        try:
            await self.client.delete_product(product_id)
        except StoreError as e:
            self._raise_for_store_error("eliminar", e)
        logger.info(f"Product deleted: {product_id}")
        await self.sync.refresh(background=False)
