"""Pytest fixtures: local settings DB and an in-memory Apps Script fake."""

import json
from types import SimpleNamespace

import httpx
import pytest

from floordepot.core.sheet_client import SheetStoreClient
from floordepot.database import build_engine, create_db_and_tables
from floordepot.repositories.setting_repo import SettingRepository
from floordepot.services.endpoint_config import EndpointConfig

SCRIPT_URL = "https://script.google.com/macros/s/AKfy-test/exec"


class FakeSheet:
    """
    Mimics the Apps Script web app: rows keyed by lowercase headers,
    createdAt stamped on create and preserved on update, "ID no encontrado"
    for unknown ids.
    """

    def __init__(self, rows=None):
        self.rows = [dict(r) for r in (rows or [])]
        self.requests: list[httpx.Request] = []
        self.fail_with: httpx.Response | None = None

    @staticmethod
    def _ok(**extra):
        return httpx.Response(200, json={"status": "success", **extra})

    @staticmethod
    def _error(message):
        return httpx.Response(200, json={"status": "error", "message": message})

    def _find(self, product_id):
        for idx, row in enumerate(self.rows):
            if str(row.get("id", "")).strip() == product_id:
                return idx
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return self.fail_with

        if request.method == "GET":
            return self._ok(data=self.rows)

        body = json.loads(request.content)
        action = body["action"]

        if action == "create":
            row = {key.lower(): value for key, value in body["data"].items()}
            row["createdat"] = "2026-10-18T12:00:00.000Z"
            self.rows.append(row)
            return self._ok(action="create")

        if action == "update":
            idx = self._find(str(body["id"]).strip())
            if idx is None:
                return self._error("ID no encontrado")
            current = self.rows[idx]
            updated = {key.lower(): value for key, value in body["data"].items()}
            updated["id"] = current["id"]
            updated["createdat"] = current.get("createdat")
            self.rows[idx] = updated
            return self._ok(action="update")

        if action == "delete":
            product_id = str(body["id"]).strip()
            idx = self._find(product_id)
            if idx is None:
                return self._error("ID no encontrado")
            del self.rows[idx]
            return self._ok(action="delete", id=product_id)

        return self._error(f"Acción desconocida: {action}")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def sheet():
    return FakeSheet()


@pytest.fixture
def configured():
    """Minimal stand-in for EndpointConfig with a URL set."""
    return SimpleNamespace(url=SCRIPT_URL, is_configured=True)


@pytest.fixture
def unconfigured():
    return SimpleNamespace(url=None, is_configured=False)


@pytest.fixture
def store_client(sheet, configured):
    return SheetStoreClient(configured, transport=sheet.transport)


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'settings.db'}")
    create_db_and_tables(eng)
    return eng


@pytest.fixture
def endpoint_config(engine):
    return EndpointConfig(engine=engine, repo=SettingRepository())
