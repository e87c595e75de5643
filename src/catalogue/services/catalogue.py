from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from fastapi.encoders import jsonable_encoder

from ..errors import DependencyUnavailable, NotFound, QueryFailed
from ..repository.store import Document, ProductStore
from ..state import ConnectionStateCell

T = TypeVar("T")


class CatalogueService:
    """Catalogue read operations over the bound product store.

    Every operation checks connectivity first and raises
    :class:`DependencyUnavailable` without issuing a query when the store is
    not connected yet. Store exceptions are wrapped in :class:`QueryFailed`
    with an operation specific ``error_type``, and so are results that cannot
    be encoded as JSON.
    """

    def __init__(self, cell: ConnectionStateCell, dependency: str = "mongodb") -> None:
        self._cell = cell
        self._dependency = dependency

    def _require_store(self) -> ProductStore:
        store = self._cell.store
        if store is None:
            raise DependencyUnavailable(self._dependency)
        return store

    async def _run(
        self,
        error_type: str,
        query: Callable[[ProductStore], Awaitable[T]],
        context: Optional[Dict[str, Any]] = None,
    ) -> T:
        store = self._require_store()
        try:
            # Encode here so unserialisable documents fail as QueryFailed
            return jsonable_encoder(await query(store))
        except Exception as exc:
            raise QueryFailed(error_type, context=context) from exc

    async def list_all(self) -> List[Document]:
        return await self._run("FETCH_PRODUCTS_FAILED", lambda store: store.find_all())

    async def get_by_sku(self, sku: str) -> Document:
        product = await self._run(
            "FETCH_PRODUCT_FAILED",
            lambda store: store.find_one_by_sku(sku),
            context={"sku": sku},
        )
        if product is None:
            raise NotFound("SKU not found", error_type="SKU_NOT_FOUND", context={"sku": sku})
        return product

    async def list_by_category(self, category: str) -> List[Document]:
        products = await self._run(
            "FETCH_CATEGORY_FAILED",
            lambda store: store.find_by_category(category),
            context={"category": category},
        )
        if not products:
            raise NotFound(
                f"No products for {category}",
                error_type="CATEGORY_EMPTY",
                context={"category": category},
            )
        return products

    async def list_categories(self) -> List[str]:
        return await self._run("FETCH_CATEGORIES_FAILED", lambda store: store.distinct_categories())

    async def search_text(self, query: Optional[str] = None) -> List[Document]:
        # No hits is a normal result here, unlike list_by_category
        if not query or not query.strip():
            return await self._run("SEARCH_FAILED", lambda store: store.find_all())
        return await self._run(
            "SEARCH_FAILED",
            lambda store: store.text_search(query),
            context={"query": query},
        )


__all__ = ["CatalogueService"]
