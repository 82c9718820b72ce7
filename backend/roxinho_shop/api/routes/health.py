from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from roxinho_shop.api.dependencies.database import get_db
from roxinho_shop.core.config import Settings, get_settings
from roxinho_shop.models.dto.health import HealthResponse
from roxinho_shop.services import health_service

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    body, status_code = await health_service.get_health(db, settings)
    return JSONResponse(status_code=status_code, content=body)
