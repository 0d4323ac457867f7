# floordepot/routers/sheet_config.py
from fastapi import APIRouter, Depends, HTTPException, status

from floordepot.dependencies import (
    get_catalog_state,
    get_catalog_sync,
    get_endpoint_config,
)
from floordepot.schemas.catalog import EndpointConfigRead, EndpointConfigUpdate
from floordepot.services.catalog_sync import CatalogState, CatalogSync
from floordepot.services.endpoint_config import EndpointConfig

router = APIRouter(prefix="/config", tags=["Config"])


@router.get("", response_model=EndpointConfigRead)
def get_config(config: EndpointConfig = Depends(get_endpoint_config)):
    """
    Whether the catalog is connected to a sheet, and where the URL comes from.

    The URL itself is not returned.
    """
    return EndpointConfigRead(configured=config.is_configured, source=config.source)


@router.put("", response_model=EndpointConfigRead)
async def save_config(
    payload: EndpointConfigUpdate,
    config: EndpointConfig = Depends(get_endpoint_config),
    sync: CatalogSync = Depends(get_catalog_sync),
):
    """
    Connect to an Apps Script deployment and start polling.

    - URL must point to script.google.com.
    - Polling starts with a foreground load.
    """
    try:
        config.save(str(payload.url))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    sync.start()
    return EndpointConfigRead(configured=config.is_configured, source=config.source)


@router.delete("", response_model=EndpointConfigRead)
async def reset_config(
    config: EndpointConfig = Depends(get_endpoint_config),
    sync: CatalogSync = Depends(get_catalog_sync),
    state: CatalogState = Depends(get_catalog_state),
):
    """
    Forget the saved URL and stop polling.

    A URL baked into the deployment (SHEET_SCRIPT_URL) cannot be reset here;
    the catalog stays connected in that case.
    """
    config.clear()
    if not config.is_configured:
        await sync.stop()
        state.replace([])
    return EndpointConfigRead(configured=config.is_configured, source=config.source)
