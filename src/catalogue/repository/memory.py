"""
In-memory product store for local development and tests.

Implements the same interface as :mod:`catalogue.repository.mongo` over a
list of plain dictionaries. Text search approximates a MongoDB text index:
the query is split into terms and a product matches when any term appears
as a word in one of its string fields.
"""

from __future__ import annotations

import copy
import re
from typing import Any, Iterable, Iterator, List, Optional

from .store import Document, ProductStore

_WORD_RE = re.compile(r"\w+", re.UNICODE)


def _words(value: Any) -> Iterator[str]:
    if isinstance(value, str):
        for match in _WORD_RE.finditer(value):
            yield match.group(0).lower()
    elif isinstance(value, dict):
        for item in value.values():
            yield from _words(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _words(item)


def _categories(product: Document) -> List[Any]:
    # MongoDB matches a scalar field by equality and an array by membership
    value = product.get("categories")
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class InMemoryProductStore(ProductStore):
    def __init__(self, products: Iterable[Document] = ()) -> None:
        self._products: List[Document] = [copy.deepcopy(p) for p in products]

    async def find_all(self) -> List[Document]:
        return copy.deepcopy(self._products)

    async def find_one_by_sku(self, sku: str) -> Optional[Document]:
        for product in self._products:
            if product.get("sku") == sku:
                return copy.deepcopy(product)
        return None

    async def find_by_category(self, category: str) -> List[Document]:
        matches = [p for p in self._products if category in _categories(p)]
        matches.sort(key=lambda p: p.get("name", ""))
        return copy.deepcopy(matches)

    async def distinct_categories(self) -> List[str]:
        seen: List[str] = []
        for product in self._products:
            for category in _categories(product):
                if category not in seen:
                    seen.append(category)
        return seen

    async def text_search(self, text: str) -> List[Document]:
        terms = set(_words(text))
        if not terms:
            return []
        hits = [p for p in self._products if terms.intersection(_words(p))]
        return copy.deepcopy(hits)


__all__ = ["InMemoryProductStore"]
