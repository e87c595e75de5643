from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ..services.catalogue import CatalogueService
from .deps import get_service

router = APIRouter(prefix="/search", tags=["search"])


@router.get("")
async def search_all(service: CatalogueService = Depends(get_service)) -> List[Dict[str, Any]]:
    return await service.search_text("")


@router.get("/{text}")
async def search(text: str, service: CatalogueService = Depends(get_service)) -> List[Dict[str, Any]]:
    return await service.search_text(text)


__all__ = ["router"]
