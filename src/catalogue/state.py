from __future__ import annotations

import asyncio
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .repository.store import ProductStore


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class ConnectionStateCell:
    """Single-assignment holder for the connected product store.

    The cell starts out disconnected and flips to connected exactly once,
    when a store is bound. The store reference is assigned before the flag
    so a reader that observes ``CONNECTED`` always finds a store.
    """

    def __init__(self) -> None:
        self._store: Optional["ProductStore"] = None
        self._connected = asyncio.Event()

    @property
    def state(self) -> ConnectionState:
        if self._connected.is_set():
            return ConnectionState.CONNECTED
        return ConnectionState.DISCONNECTED

    @property
    def connected(self) -> bool:
        return self._connected.is_set()

    @property
    def store(self) -> Optional["ProductStore"]:
        if not self._connected.is_set():
            return None
        return self._store

    def bind(self, store: "ProductStore") -> None:
        if self._connected.is_set():
            raise RuntimeError("connection state has already been bound")
        self._store = store
        self._connected.set()

    async def wait_connected(self) -> "ProductStore":
        await self._connected.wait()
        if self._store is None:
            raise RuntimeError("connection state is set without a bound store")
        return self._store


__all__ = ["ConnectionState", "ConnectionStateCell"]
