# floordepot/services/catalog_sync.py
import asyncio
import logging
from datetime import datetime, timezone

from floordepot.schemas.product import Product

logger = logging.getLogger(__name__)


class CatalogState:
    """
    In-memory product set shown by every view.

    Only CatalogSync writes here (replace on every completed read);
    routers and services only read.
    """

    def __init__(self):
        self.products: list[Product] = []
        self.loading: bool = False
        self.last_updated: datetime | None = None

    def replace(self, products: list[Product]) -> None:
        # Newest first: the sheet appends rows at the bottom
        self.products = list(reversed(products))
        self.last_updated = datetime.now(timezone.utc)


class CatalogSync:
    """
    Keeps CatalogState eventually consistent with the shared sheet.

    - foreground refresh: initial load / manual refresh / after a write,
      `state.loading` is True while the read is in flight
    - background refresh: every `interval` seconds, silent

    Ordering: whichever read completes last wins. A slow foreground read
    finishing after a fast background one can briefly show older data.
    """

    def __init__(self, client, config, state: CatalogState, interval: float = 5.0):
        self.client = client
        self.config = config
        self.state = state
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh(self, background: bool = False) -> list[Product]:
        if not self.config.is_configured:
            return self.state.products

        if not background:
            self.state.loading = True
        try:
            products = await self.client.list_products()
            self.state.replace(products)
        finally:
            if not background:
                self.state.loading = False
        return self.state.products

    async def _run(self) -> None:
        # stop() ends the schedule; a read already in flight still completes
        await asyncio.shield(self.refresh(background=False))
        while True:
            await asyncio.sleep(self.interval)
            try:
                await asyncio.shield(self.refresh(background=True))
            except Exception as e:
                # list_products never raises; keep the loop alive regardless
                logger.error(f"Background catalog refresh failed: {e}")

    def start(self) -> bool:
        """
        Start polling if configured. Idempotent.

        Returns True when the loop is running after the call.
        """
        if not self.config.is_configured:
            return False
        if self.running:
            return True
        logger.info(f"Starting catalog polling every {self.interval}s")
        self._task = asyncio.create_task(self._run())
        return True

    async def stop(self) -> None:
        """Cancel the polling task; no timer survives this call."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Catalog polling stopped")
