from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roxinho_shop.api.dependencies.auth import TokenUser, require_admin
from roxinho_shop.api.dependencies.database import get_db
from roxinho_shop.models.dto import DetailResponse
from roxinho_shop.models.dto.category import CategoryCreate, CategoryResponse, CategoryUpdate
from roxinho_shop.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await category_service.list_active(db)


@router.get("/all", response_model=list[CategoryResponse])
async def list_all_categories(
    db: AsyncSession = Depends(get_db),
    admin: TokenUser = Depends(require_admin),
):
    return await category_service.list_all(db)


@router.get("/{slug}", response_model=CategoryResponse)
async def get_category(slug: str, db: AsyncSession = Depends(get_db)):
    return await category_service.get_by_slug(db, slug)


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    body: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    admin: TokenUser = Depends(require_admin),
):
    return await category_service.create(db, body)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    body: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    admin: TokenUser = Depends(require_admin),
):
    return await category_service.update(db, category_id, body.model_dump(exclude_unset=True))


@router.delete("/{category_id}", response_model=DetailResponse)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    admin: TokenUser = Depends(require_admin),
):
    await category_service.deactivate(db, category_id)
    return {"detail": "Categoria desativada com sucesso!"}
