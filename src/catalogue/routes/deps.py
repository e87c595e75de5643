from __future__ import annotations

from fastapi import Request

from ..services.catalogue import CatalogueService
from ..state import ConnectionStateCell


def get_service(request: Request) -> CatalogueService:
    return request.app.state.catalogue


def get_connection_state(request: Request) -> ConnectionStateCell:
    return request.app.state.connection


__all__ = ["get_connection_state", "get_service"]
