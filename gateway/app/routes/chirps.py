"""
Chirp 라우터 (Chirp Routes)
- chirp 본문 길이 검증
"""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from shared import ChirpRequest, ChirpValidResponse, Settings
from app.auth import get_app_settings


router = APIRouter()


@router.post("/validate_chirp", response_model=ChirpValidResponse)
async def validate_chirp(
    request: ChirpRequest,
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """본문이 max_chirp_length(기본 140자) 이하면 valid, 초과하면 400"""
    if len(request.body) > settings.max_chirp_length:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Chirp is too long"},
        )
    return ChirpValidResponse(valid=True)
