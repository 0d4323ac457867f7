# floordepot/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from floordepot.core.config import get_settings
from floordepot.core.sheet_client import SheetStoreClient
from floordepot import database
from floordepot.repositories.setting_repo import SettingRepository
from floordepot.services.catalog_sync import CatalogState, CatalogSync
from floordepot.services.endpoint_config import EndpointConfig
from floordepot.services.product_service import ProductService

# Import models so SQLModel metadata is populated before create_all()
from floordepot.models import setting as _setting_models  # noqa: F401

# Routers
from floordepot.routers.catalog import router as catalog_router
from floordepot.routers.admin import router as admin_router
from floordepot.routers.sheet_config import router as config_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Create the local settings table.
      - Resolve the sheet URL (constant first, then persisted).
      - Build the store adapter and start polling when configured.

    Shutdown:
      - Stop polling and close the HTTP client.
    """
    logger.info("🔄 Startup: preparing local settings store...")
    try:
        database.create_db_and_tables()
    except Exception as e:
        logger.error(f"❌ Startup: settings store FAILED: {e}")
        raise

    endpoint_config = EndpointConfig(
        engine=database.engine,
        repo=SettingRepository(),
        constant_url=settings.SHEET_SCRIPT_URL,
    )
    endpoint_config.load()

    client = SheetStoreClient(endpoint_config)
    state = CatalogState()
    sync = CatalogSync(client, endpoint_config, state, interval=settings.POLL_INTERVAL_SECONDS)

    app.state.endpoint_config = endpoint_config
    app.state.catalog_state = state
    app.state.catalog_sync = sync
    app.state.product_service = ProductService(client, sync)

    if sync.start():
        logger.info("✅ Startup: connected to Google Sheets, polling started.")
    else:
        logger.info("⚠️ Startup: no sheet URL configured, waiting for PUT /config.")

    yield

    await sync.stop()
    await client.aclose()


app = FastAPI(
    title=settings.PROJECT_NAME or "Floor Depot Catalog",
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(catalog_router, prefix=settings.API_V1_STR)
app.include_router(admin_router, prefix=settings.API_V1_STR)
app.include_router(config_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "floordepot-catalog"}
