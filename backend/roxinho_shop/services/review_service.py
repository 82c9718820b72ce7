import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from roxinho_shop.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from roxinho_shop.models.dto.auth import TokenUser
from roxinho_shop.models.dto.review import ReviewCreate
from roxinho_shop.models.orm.review import Review, ReviewVote
from roxinho_shop.services import product_service

logger = logging.getLogger(__name__)

_MUTABLE_REVIEW_FIELDS = {"rating", "title", "comment"}


async def list_for_product(db: AsyncSession, product_id: UUID) -> dict:
    """Reviews of an active product, newest first, with rating statistics."""
    await product_service.get_active(db, product_id)

    result = await db.execute(
        select(Review)
        .where(Review.product_id == product_id)
        .order_by(Review.created_at.desc())
    )
    reviews = list(result.scalars().all())

    counts = await db.execute(
        select(Review.rating, func.count())
        .where(Review.product_id == product_id)
        .group_by(Review.rating)
    )
    distribution = {star: 0 for star in range(1, 6)}
    for rating, count in counts.all():
        distribution[rating] = count
    total = sum(distribution.values())
    average = (
        round(sum(star * n for star, n in distribution.items()) / total, 2) if total else None
    )
    return {
        "items": reviews,
        "stats": {"total": total, "average": average, "distribution": distribution},
    }


async def _get(db: AsyncSession, review_id: UUID) -> Review:
    review = await db.get(Review, review_id)
    if not review:
        raise NotFoundError("Avaliação não encontrada.")
    return review


async def create(db: AsyncSession, user: TokenUser, body: ReviewCreate) -> Review:
    await product_service.get_active(db, body.product_id)

    existing = await db.execute(
        select(Review.id).where(Review.product_id == body.product_id, Review.user_id == user.id)
    )
    if existing.scalar_one_or_none():
        raise ConflictError("Você já avaliou este produto.")

    review = Review(
        product_id=body.product_id,
        user_id=user.id,
        user_name=user.name,
        rating=body.rating,
        title=body.title,
        comment=body.comment,
        helpful_count=0,
    )
    db.add(review)
    await db.flush()
    await db.refresh(review)
    logger.info("Review %s created for product %s", review.id, body.product_id)
    return review


async def update(db: AsyncSession, review_id: UUID, user: TokenUser, data: dict) -> Review:
    review = await _get(db, review_id)
    if review.user_id != user.id:
        raise ForbiddenError("Você não tem permissão para editar esta avaliação.")

    for field, value in data.items():
        if field in _MUTABLE_REVIEW_FIELDS and value is not None:
            setattr(review, field, value)
    await db.flush()
    await db.refresh(review)
    return review


async def delete(db: AsyncSession, review_id: UUID, user: TokenUser) -> None:
    """Remove a review. Authors may delete their own; admins may delete any."""
    review = await _get(db, review_id)
    if review.user_id != user.id and not user.is_admin:
        raise ForbiddenError("Você não tem permissão para remover esta avaliação.")
    await db.delete(review)
    await db.flush()


async def vote(db: AsyncSession, review_id: UUID, user: TokenUser, helpful: bool) -> int:
    """Record or change the caller's vote and return the review's helpful count."""
    review = await _get(db, review_id)

    result = await db.execute(
        select(ReviewVote).where(ReviewVote.review_id == review_id, ReviewVote.user_id == user.id)
    )
    existing = result.scalar_one_or_none()
    if existing:
        existing.helpful = helpful
    else:
        db.add(ReviewVote(review_id=review_id, user_id=user.id, helpful=helpful))
    await db.flush()

    count = await db.execute(
        select(func.count())
        .select_from(ReviewVote)
        .where(ReviewVote.review_id == review_id, ReviewVote.helpful.is_(True))
    )
    review.helpful_count = count.scalar() or 0
    await db.flush()
    return review.helpful_count
