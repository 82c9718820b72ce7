from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roxinho_shop.api.dependencies.auth import TokenUser, get_current_user
from roxinho_shop.api.dependencies.database import get_db
from roxinho_shop.models.dto import DetailResponse
from roxinho_shop.models.dto.history import HistoryResponse, ProductViewCreate
from roxinho_shop.services import history_service

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=HistoryResponse)
async def get_history(
    db: AsyncSession = Depends(get_db),
    user: TokenUser = Depends(get_current_user),
):
    return {"items": await history_service.list_history(db, user.id)}


@router.post("", response_model=DetailResponse, status_code=201)
async def record_view(
    body: ProductViewCreate,
    db: AsyncSession = Depends(get_db),
    user: TokenUser = Depends(get_current_user),
):
    await history_service.record_view(db, user.id, body.product_id)
    return {"detail": "Visualização registrada."}


@router.delete("", response_model=DetailResponse)
async def clear_history(
    db: AsyncSession = Depends(get_db),
    user: TokenUser = Depends(get_current_user),
):
    await history_service.clear_history(db, user.id)
    return {"detail": "Histórico limpo com sucesso."}
