# floordepot/routers/catalog.py
from fastapi import APIRouter, Depends

from floordepot.core.config import Settings
from floordepot.dependencies import (
    get_app_settings,
    get_catalog_state,
    get_catalog_sync,
    get_endpoint_config,
    get_product_service,
)
from floordepot.schemas.catalog import CatalogStatus, CategoryOption
from floordepot.schemas.product import (
    FILTER_ALL,
    FILTER_FEATURED,
    ProductCategory,
    ProductPublic,
    WhatsAppLink,
)
from floordepot.services.catalog_sync import CatalogState, CatalogSync
from floordepot.services.endpoint_config import EndpointConfig
from floordepot.services.product_service import ProductService

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("/products", response_model=list[ProductPublic])
def list_products(
    category: str = FILTER_FEATURED,
    search: str = "",
    state: CatalogState = Depends(get_catalog_state),
    service: ProductService = Depends(get_product_service),
):
    """
    Public storefront listing.

    - `category=DESTACADOS` (default) shows featured products only.
    - `category=TODOS` shows everything.
    - `search` matches name or code, case-insensitive.
    - Cost and provider are never exposed here.
    """
    products = service.filter_public(state.products, category=category, search=search)
    return [ProductPublic.from_product(p) for p in products]


@router.get("/products/{product_id}", response_model=ProductPublic)
def get_product(
    product_id: str,
    state: CatalogState = Depends(get_catalog_state),
    service: ProductService = Depends(get_product_service),
):
    """Product detail (public)."""
    return ProductPublic.from_product(service.get_product(state.products, product_id))


@router.get("/products/{product_id}/whatsapp", response_model=WhatsAppLink)
def get_whatsapp_link(
    product_id: str,
    state: CatalogState = Depends(get_catalog_state),
    service: ProductService = Depends(get_product_service),
    settings: Settings = Depends(get_app_settings),
):
    """
    WhatsApp contact link pre-filled with the product name and code.
    """
    product = service.get_product(state.products, product_id)
    return WhatsAppLink(
        product_id=product.id,
        url=service.contact_link(product, settings.WHATSAPP_PHONE),
    )


@router.get("/categories", response_model=list[CategoryOption])
def list_categories():
    """Filter buttons, in storefront order."""
    options = [
        CategoryOption(value=FILTER_FEATURED, label="Destacados"),
        CategoryOption(value=FILTER_ALL, label="Todos"),
    ]
    options.extend(CategoryOption(value=c.value, label=c.value) for c in ProductCategory)
    return options


@router.get("/status", response_model=CatalogStatus)
def get_status(
    state: CatalogState = Depends(get_catalog_state),
    sync: CatalogSync = Depends(get_catalog_sync),
    config: EndpointConfig = Depends(get_endpoint_config),
):
    return CatalogStatus(
        configured=config.is_configured,
        loading=state.loading,
        polling=sync.running,
        last_updated=state.last_updated,
        product_count=len(state.products),
    )
