# floordepot/dependencies.py
"""
FastAPI dependencies exposing the objects built in the app lifespan.

The adapter, loop and config live on `app.state` (created per lifespan,
so every TestClient context gets a fresh HTTP client).
"""

from fastapi import Request

from floordepot.core.config import Settings, get_settings
from floordepot.services.catalog_sync import CatalogState, CatalogSync
from floordepot.services.endpoint_config import EndpointConfig
from floordepot.services.product_service import ProductService


def get_endpoint_config(request: Request) -> EndpointConfig:
    return request.app.state.endpoint_config


def get_catalog_state(request: Request) -> CatalogState:
    return request.app.state.catalog_state


def get_catalog_sync(request: Request) -> CatalogSync:
    return request.app.state.catalog_sync


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


def get_app_settings() -> Settings:
    return get_settings()
