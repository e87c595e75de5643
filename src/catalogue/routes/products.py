from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ..services.catalogue import CatalogueService
from .deps import get_service

router = APIRouter(tags=["products"])


@router.get("/products")
async def list_products(service: CatalogueService = Depends(get_service)) -> List[Dict[str, Any]]:
    return await service.list_all()


@router.get("/product/{sku}")
async def get_product(sku: str, service: CatalogueService = Depends(get_service)) -> Dict[str, Any]:
    return await service.get_by_sku(sku)


@router.get("/products/{cat}")
async def list_products_by_category(
    cat: str,
    service: CatalogueService = Depends(get_service),
) -> List[Dict[str, Any]]:
    return await service.list_by_category(cat)


@router.get("/categories")
async def list_categories(service: CatalogueService = Depends(get_service)) -> List[str]:
    return await service.list_categories()


__all__ = ["router"]
