"""Connection lifecycle for the document store.

The supervisor makes repeated single connection attempts until one succeeds,
binds the resulting store into the shared :class:`ConnectionStateCell` and
then stops. There is no disconnect detection: once connected, the state
never reverts and later store failures surface as query errors.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Awaitable, Callable, Optional

from .config import CatalogueSettings, get_settings
from .errors import ConnectError
from .logging import get_logger
from .repository.mongo import MongoProductStore
from .repository.store import ProductStore
from .state import ConnectionState, ConnectionStateCell

logger = get_logger("catalogue.supervisor")

Connector = Callable[[str], Awaitable[ProductStore]]


def default_connector(settings: CatalogueSettings) -> Connector:
    return partial(
        MongoProductStore.connect,
        database=settings.mongo_database,
        collection=settings.mongo_collection,
    )


class ConnectionSupervisor:
    """Owns connect/retry for the product store."""

    def __init__(
        self,
        cell: ConnectionStateCell,
        connector: Optional[Connector] = None,
        retry_interval: Optional[float] = None,
        settings: Optional[CatalogueSettings] = None,
    ) -> None:
        settings = settings or get_settings()
        self._cell = cell
        self._connector = connector or default_connector(settings)
        self._retry_interval = settings.retry_interval if retry_interval is None else retry_interval
        self._database = settings.mongo_database
        self._task: asyncio.Task[ProductStore] | None = None

    @property
    def cell(self) -> ConnectionStateCell:
        return self._cell

    def current_state(self) -> ConnectionState:
        return self._cell.state

    async def connect(self, target: str) -> ProductStore:
        """Make one connection attempt and bind the store on success."""
        try:
            store = await self._connector(target)
        except Exception as exc:
            raise ConnectError(target, exc) from exc
        try:
            self._cell.bind(store)
        except RuntimeError:
            # Another attempt won the bind; this handle would otherwise leak
            await store.close()
            raise
        logger.info("mongodb_connected", database=self._database)
        return store

    async def supervise_forever(self, target: str) -> ProductStore:
        """Retry :meth:`connect` until it succeeds, then return the store."""
        attempt = 0
        while True:
            existing = self._cell.store
            if existing is not None:
                return existing
            attempt += 1
            try:
                return await self.connect(target)
            except ConnectError as exc:
                logger.error(
                    "mongodb_connection_failed",
                    attempt=attempt,
                    error=str(exc.cause),
                    error_class=type(exc.cause).__name__,
                    retry_in_ms=int(self._retry_interval * 1000),
                )
            await asyncio.sleep(self._retry_interval)

    def start(self, target: str) -> None:
        """Run :meth:`supervise_forever` as a background task."""
        if self._cell.connected:
            return
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.create_task(self.supervise_forever(target), name="mongo-supervisor")
        self._task.add_done_callback(self._log_task_failure)

    @staticmethod
    def _log_task_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "mongodb_supervisor_crashed",
                error=repr(exc),
                error_class=type(exc).__name__,
                exc_info=exc,
            )

    async def stop(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        store = self._cell.store
        if store is not None:
            await store.close()


__all__ = ["ConnectionSupervisor", "Connector", "default_connector"]
