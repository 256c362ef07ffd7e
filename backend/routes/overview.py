from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import get_conversion_service
from ..models.responses import OverviewResponse


router = APIRouter()


@router.get("/overview", response_model=OverviewResponse)
async def overview(asset: str = "", mode: str = "short", service=Depends(get_conversion_service)):
    """Short or long term outlook with chart data for one asset."""
    result = await service.overview(asset, mode)
    return result.to_dict()
