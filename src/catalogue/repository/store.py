from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Document = Dict[str, Any]


class ProductStore(ABC):
    """Abstract read interface over the products collection."""

    @abstractmethod
    async def find_all(self) -> List[Document]:
        """Return every product, in natural order."""

    @abstractmethod
    async def find_one_by_sku(self, sku: str) -> Optional[Document]:
        """Return the product with an exact ``sku`` match, or ``None``."""

    @abstractmethod
    async def find_by_category(self, category: str) -> List[Document]:
        """Return products whose ``categories`` contain ``category``, sorted by name."""

    @abstractmethod
    async def distinct_categories(self) -> List[str]:
        """Return the distinct union of all ``categories`` values."""

    @abstractmethod
    async def text_search(self, text: str) -> List[Document]:
        """Run a text-index query over product content."""

    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        return None


__all__ = ["Document", "ProductStore"]
