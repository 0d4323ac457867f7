# floordepot/services/endpoint_config.py
import logging
from urllib.parse import urlparse

from sqlalchemy.engine import Engine
from sqlmodel import Session

from floordepot.repositories.setting_repo import SettingRepository

logger = logging.getLogger(__name__)

SHEET_URL_KEY = "sheet_url"
SCRIPT_HOST_MARKER = "script.google.com"

SOURCE_CONSTANT = "constant"
SOURCE_PERSISTED = "persisted"


class EndpointConfig:
    """
    Resolves the Apps Script URL the store adapter talks to.

    Resolution order:
      1. build-time constant (SHEET_SCRIPT_URL setting)
      2. URL saved by the administrator (app_settings table)

    Lifecycle:
      - load():  read persisted value at startup (cached afterwards)
      - save():  validate + persist a new URL
      - clear(): forget the persisted URL (explicit reset)
    """

    def __init__(
        self,
        engine: Engine,
        repo: SettingRepository,
        constant_url: str = "",
    ):
        self.engine = engine
        self.repo = repo
        self.constant_url = (constant_url or "").strip()
        self._persisted_url: str | None = None

    # ----- Lifecycle -----

    def load(self) -> str | None:
        with Session(self.engine) as session:
            setting = self.repo.get(session, SHEET_URL_KEY)
        self._persisted_url = setting.value.strip() if setting and setting.value.strip() else None
        url = self.url
        logger.info(f"Sheet endpoint resolved from {self.source or 'nowhere (unconfigured)'}")
        return url

    def save(self, url: str) -> str:
        """
        Persist a user-supplied script URL.

        Raises:
            ValueError: if the URL is not a Google Apps Script URL.
        """
        cleaned = (url or "").strip()
        parsed = urlparse(cleaned)
        if parsed.scheme not in ("http", "https") or SCRIPT_HOST_MARKER not in parsed.netloc:
            raise ValueError("Por favor ingresa una URL válida de Google Apps Script")

        with Session(self.engine) as session:
            self.repo.upsert(session, SHEET_URL_KEY, cleaned)
        self._persisted_url = cleaned
        logger.info("Sheet endpoint saved")
        return cleaned

    def clear(self) -> None:
        with Session(self.engine) as session:
            self.repo.delete(session, SHEET_URL_KEY)
        self._persisted_url = None
        logger.info("Persisted sheet endpoint cleared")

    # ----- State -----

    @property
    def url(self) -> str | None:
        if self.constant_url:
            return self.constant_url
        return self._persisted_url

    @property
    def source(self) -> str | None:
        if self.constant_url:
            return SOURCE_CONSTANT
        if self._persisted_url:
            return SOURCE_PERSISTED
        return None

    @property
    def is_configured(self) -> bool:
        return self.url is not None
