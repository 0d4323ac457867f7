# floordepot/routers/admin.py
from fastapi import APIRouter, Depends, status

from floordepot.dependencies import (
    get_catalog_state,
    get_catalog_sync,
    get_product_service,
)
from floordepot.schemas.catalog import CatalogStatus
from floordepot.schemas.product import (
    FILTER_ALL,
    ProductAdmin,
    ProductCreate,
    ProductUpdate,
)
from floordepot.services.catalog_sync import CatalogState, CatalogSync
from floordepot.services.product_service import ProductService

# NOTE: no access control. The admin panel is only a UI mode;
# do not expose this router publicly as-is.
router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/products", response_model=list[ProductAdmin])
def list_products(
    category: str = FILTER_ALL,
    state: CatalogState = Depends(get_catalog_state),
    service: ProductService = Depends(get_product_service),
):
    """
    Inventory table including private fields (cost, provider).
    """
    products = service.filter_admin(state.products, category=category)
    return [ProductAdmin.from_product(p) for p in products]


@router.post(
    "/products",
    response_model=ProductAdmin,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
):
    """
    Append a product to the sheet.

    - A fresh id is generated here; createdAt is set by the sheet.
    - The catalog is reloaded (foreground) once the sheet acknowledges.
    """
    product = await service.create_product(payload)
    return ProductAdmin.from_product(product)


@router.put("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    """
    Replace every editable field of a product (id and createdAt are kept).
    """
    await service.update_product(product_id, payload)
    return None


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    """
    Permanently remove the product row from the sheet.
    """
    await service.delete_product(product_id)
    return None


@router.post("/refresh", response_model=CatalogStatus)
async def refresh_catalog(
    state: CatalogState = Depends(get_catalog_state),
    sync: CatalogSync = Depends(get_catalog_sync),
):
    """Manual (foreground) reload from the sheet."""
    await sync.refresh(background=False)
    return CatalogStatus(
        configured=sync.config.is_configured,
        loading=state.loading,
        polling=sync.running,
        last_updated=state.last_updated,
        product_count=len(state.products),
    )
