from __future__ import annotations

from fastapi import APIRouter, Depends

from asset_converter.health import get_health_status
from ..dependencies import get_conversion_service


router = APIRouter()


@router.get("/health")
async def health(service=Depends(get_conversion_service)):
    status = await get_health_status(service=service, store=service.oracle.store)
    # health structure is already a dict with status, details
    return status
