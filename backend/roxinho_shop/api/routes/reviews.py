from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roxinho_shop.api.dependencies.auth import TokenUser, get_current_user
from roxinho_shop.api.dependencies.database import get_db
from roxinho_shop.models.dto import DetailResponse
from roxinho_shop.models.dto.review import (
    ReviewCreate,
    ReviewListResponse,
    ReviewResponse,
    ReviewUpdate,
    ReviewVoteRequest,
    ReviewVoteResponse,
)
from roxinho_shop.services import review_service

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("/product/{product_id}", response_model=ReviewListResponse)
async def list_product_reviews(product_id: UUID, db: AsyncSession = Depends(get_db)):
    return await review_service.list_for_product(db, product_id)


@router.post("", response_model=ReviewResponse, status_code=201)
async def create_review(
    body: ReviewCreate,
    db: AsyncSession = Depends(get_db),
    user: TokenUser = Depends(get_current_user),
):
    return await review_service.create(db, user, body)


@router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: UUID,
    body: ReviewUpdate,
    db: AsyncSession = Depends(get_db),
    user: TokenUser = Depends(get_current_user),
):
    return await review_service.update(db, review_id, user, body.model_dump(exclude_unset=True))


@router.delete("/{review_id}", response_model=DetailResponse)
async def delete_review(
    review_id: UUID,
    db: AsyncSession = Depends(get_db),
    user: TokenUser = Depends(get_current_user),
):
    await review_service.delete(db, review_id, user)
    return {"detail": "Avaliação removida com sucesso."}


@router.post("/{review_id}/vote", response_model=ReviewVoteResponse)
async def vote_review(
    review_id: UUID,
    body: ReviewVoteRequest,
    db: AsyncSession = Depends(get_db),
    user: TokenUser = Depends(get_current_user),
):
    helpful_count = await review_service.vote(db, review_id, user, body.helpful)
    return ReviewVoteResponse(helpful_count=helpful_count)
