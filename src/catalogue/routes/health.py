from __future__ import annotations

from fastapi import APIRouter, Depends

from ..models import HealthStatus
from ..state import ConnectionStateCell
from .deps import get_connection_state

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthStatus)
async def health(cell: ConnectionStateCell = Depends(get_connection_state)) -> HealthStatus:
    # Answers even while the store is still disconnected
    return HealthStatus(app="OK", mongo=cell.connected)


__all__ = ["router"]
