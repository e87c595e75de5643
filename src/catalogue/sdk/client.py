from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote

import httpx

from ..models import HealthStatus, Product


class CatalogueServiceClient:
    """Lightweight SDK for reading from the Catalogue Service.

    Misses on ``/product/{sku}`` and ``/products/{cat}`` come back as ``None``
    and ``[]`` respectively; any other error status raises
    :class:`httpx.HTTPStatusError`.
    """

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _get(self, path: str) -> httpx.Response:
        return httpx.get(self._url(path), headers={"Accept": "application/json"}, timeout=self._timeout)

    async def _aget(self, path: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.get(self._url(path), headers={"Accept": "application/json"})

    @staticmethod
    def _products(response: httpx.Response) -> List[Product]:
        response.raise_for_status()
        return [Product.model_validate(item) for item in response.json()]

    def health(self) -> HealthStatus:
        response = self._get("/health")
        response.raise_for_status()
        return HealthStatus.model_validate(response.json())

    def list_products(self) -> List[Product]:
        return self._products(self._get("/products"))

    def get_product(self, sku: str) -> Optional[Product]:
        response = self._get(f"/product/{quote(sku, safe='')}")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return Product.model_validate(response.json())

    def list_by_category(self, category: str) -> List[Product]:
        response = self._get(f"/products/{quote(category, safe='')}")
        if response.status_code == 404:
            return []
        return self._products(response)

    def list_categories(self) -> List[str]:
        response = self._get("/categories")
        response.raise_for_status()
        return list(response.json())

    def search(self, text: str = "") -> List[Product]:
        path = f"/search/{quote(text, safe='')}" if text else "/search"
        return self._products(self._get(path))

    async def ahealth(self) -> HealthStatus:
        response = await self._aget("/health")
        response.raise_for_status()
        return HealthStatus.model_validate(response.json())

    async def alist_products(self) -> List[Product]:
        return self._products(await self._aget("/products"))

    async def aget_product(self, sku: str) -> Optional[Product]:
        response = await self._aget(f"/product/{quote(sku, safe='')}")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return Product.model_validate(response.json())

    async def alist_by_category(self, category: str) -> List[Product]:
        response = await self._aget(f"/products/{quote(category, safe='')}")
        if response.status_code == 404:
            return []
        return self._products(response)

    async def alist_categories(self) -> List[str]:
        response = await self._aget("/categories")
        response.raise_for_status()
        return list(response.json())

    async def asearch(self, text: str = "") -> List[Product]:
        path = f"/search/{quote(text, safe='')}" if text else "/search"
        return self._products(await self._aget(path))


__all__ = ["CatalogueServiceClient"]
