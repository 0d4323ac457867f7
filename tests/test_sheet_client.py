import json

import httpx
import pytest

from floordepot.core.errors import (
    InvalidProductIdError,
    StoreNotConfiguredError,
    StoreResponseError,
    StoreTransportError,
)
from floordepot.core.sheet_client import SheetStoreClient, generate_product_id
from floordepot.schemas.product import ProductCreate, ProductUpdate


def _row(product_id, **fields):
    row = {"id": product_id, "name": "", "price": 0, "images": "", "isfeatured": "FALSE"}
    row.update(fields)
    return row


@pytest.mark.asyncio
async def test_list_products_reads_with_cache_buster(sheet, store_client):
    sheet.rows = [_row("a1", name="Roble", price="15990", isfeatured="TRUE")]

    products = await store_client.list_products()

    assert [p.id for p in products] == ["a1"]
    assert products[0].price == 15990
    assert products[0].is_featured is True

    request = sheet.requests[0]
    assert request.method == "GET"
    assert request.url.params["action"] == "read"
    assert request.url.params["t"].isdigit()


@pytest.mark.asyncio
async def test_list_products_unconfigured_skips_network(sheet, unconfigured):
    client = SheetStoreClient(unconfigured, transport=sheet.transport)

    assert await client.list_products() == []
    assert sheet.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"status": "error", "message": "Falta columna ID"}),
        httpx.Response(200, json={"status": "success", "data": "nope"}),
        httpx.Response(200, json=["unexpected"]),
    ],
)
async def test_list_products_fails_soft(sheet, store_client, response):
    sheet.fail_with = response

    assert await store_client.list_products() == []


@pytest.mark.asyncio
async def test_list_products_swallows_network_errors(configured):
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    client = SheetStoreClient(configured, transport=httpx.MockTransport(handler))

    assert await client.list_products() == []


@pytest.mark.asyncio
async def test_create_assigns_id_and_serializes_for_sheet(sheet, store_client):
    payload = ProductCreate(
        name="Test",
        price=1000,
        images="https://a.com/1.jpg, https://a.com/2.jpg",
        isFeatured=True,
    )

    created = await store_client.create_product(payload)

    assert created.id
    request = sheet.requests[0]
    assert request.method == "POST"
    assert request.headers["content-type"] == "text/plain;charset=utf-8"

    body = json.loads(request.content)
    assert body["action"] == "create"
    assert body["data"]["id"] == created.id
    assert body["data"]["images"] == "https://a.com/1.jpg,https://a.com/2.jpg"
    assert body["data"]["isFeatured"] == "TRUE"


@pytest.mark.asyncio
async def test_created_product_shows_up_in_next_list(store_client):
    created = await store_client.create_product(ProductCreate(name="Test", price=1000))

    products = await store_client.list_products()

    match = [p for p in products if p.id == created.id]
    assert len(match) == 1
    assert match[0].name == "Test"
    assert match[0].price == 1000
    assert match[0].created_at == "2026-10-18T12:00:00.000Z"


@pytest.mark.asyncio
async def test_update_keeps_id_and_created_at(sheet, store_client):
    sheet.rows = [_row("p-1", name="Viejo", createdat="2025-01-01")]

    await store_client.update_product("  p-1 ", ProductUpdate(name="Nuevo", price=500))

    body = json.loads(sheet.requests[0].content)
    assert body["id"] == "p-1"
    products = await store_client.list_products()
    assert products[0].name == "Nuevo"
    assert products[0].created_at == "2025-01-01"


@pytest.mark.asyncio
async def test_update_unknown_id_raises_store_message(store_client):
    with pytest.raises(StoreResponseError) as exc:
        await store_client.update_product("missing", ProductUpdate(name="X"))

    assert exc.value.message == "ID no encontrado"
    assert exc.value.is_not_found


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["", "   ", None])
async def test_delete_blank_id_never_hits_network(sheet, store_client, bad_id):
    with pytest.raises(InvalidProductIdError):
        await store_client.delete_product(bad_id)

    assert sheet.requests == []


@pytest.mark.asyncio
async def test_delete_removes_row(sheet, store_client):
    sheet.rows = [_row("a"), _row("b")]

    await store_client.delete_product("a")

    assert [r["id"] for r in sheet.rows] == ["b"]
    assert json.loads(sheet.requests[0].content) == {"action": "delete", "id": "a"}


@pytest.mark.asyncio
async def test_delete_unknown_id_raises(store_client):
    with pytest.raises(StoreResponseError):
        await store_client.delete_product("ghost")


@pytest.mark.asyncio
async def test_writes_require_configuration(sheet, unconfigured):
    client = SheetStoreClient(unconfigured, transport=sheet.transport)

    with pytest.raises(StoreNotConfiguredError):
        await client.create_product(ProductCreate(name="X"))
    with pytest.raises(StoreNotConfiguredError):
        await client.update_product("a", ProductUpdate(name="X"))
    with pytest.raises(StoreNotConfiguredError):
        await client.delete_product("a")

    assert sheet.requests == []


@pytest.mark.asyncio
async def test_write_transport_errors_propagate(configured):
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    client = SheetStoreClient(configured, transport=httpx.MockTransport(handler))

    with pytest.raises(StoreTransportError):
        await client.create_product(ProductCreate(name="X"))


@pytest.mark.asyncio
async def test_write_http_error_status_propagates(sheet, store_client):
    sheet.fail_with = httpx.Response(503, text="unavailable")

    with pytest.raises(StoreTransportError):
        await store_client.delete_product("a")


@pytest.mark.asyncio
async def test_store_error_without_message_gets_default(sheet, store_client):
    sheet.fail_with = httpx.Response(200, json={"status": "error"})

    with pytest.raises(StoreResponseError) as exc:
        await store_client.create_product(ProductCreate(name="X"))

    assert exc.value.message == "Error desconocido en el script"


def test_generated_ids_are_unique_and_base36():
    ids = {generate_product_id() for _ in range(200)}

    assert len(ids) == 200
    assert all(i.isalnum() and i == i.lower() for i in ids)

@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["", "   ", None])
async def test_update_blank_id_never_hits_network(sheet, store_client, bad_id):
    with pytest.raises(InvalidProductIdError):
        await store_client.update_product(bad_id, ProductUpdate(name="X"))

    assert sheet.requests == []
