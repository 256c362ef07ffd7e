from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import get_conversion_service
from ..models.requests import ConvertRequest
from ..models.responses import ConversionEntry, ConvertResponse


router = APIRouter()


@router.post("/convert", response_model=ConvertResponse)
async def convert(body: ConvertRequest, service=Depends(get_conversion_service)) -> ConvertResponse:
    """Convert `value` of `asset` into every other asset of `region`."""
    results = await service.convert(body.value, body.asset, body.region, body.mode)
    return {asset: ConversionEntry(**result.to_dict()) for asset, result in results.items()}
