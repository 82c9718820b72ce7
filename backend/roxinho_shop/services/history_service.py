"""Recently viewed products per shopper.

Repeated views of the same product within ``REPEAT_VIEW_WINDOW`` bump the existing
entry instead of adding a new one, so the list reads as "recently viewed"
rather than a raw click log.
"""
import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from roxinho_shop.models.orm.product import Product
from roxinho_shop.models.orm.product_view import ProductView
from roxinho_shop.services import product_service

logger = logging.getLogger(__name__)

REPEAT_VIEW_WINDOW = timedelta(hours=24)
HISTORY_LIMIT = 50


async def record_view(db: AsyncSession, user_id: str, product_id: UUID) -> ProductView:
    await product_service.get_active(db, product_id)

    now = datetime.now(timezone.utc)
    result = await db.execute(
        select(ProductView).where(
            ProductView.user_id == user_id,
            ProductView.product_id == product_id,
            ProductView.viewed_at > now - REPEAT_VIEW_WINDOW,
        )
    )
    entry = result.scalars().first()
    if entry:
        entry.viewed_at = now
    else:
        entry = ProductView(user_id=user_id, product_id=product_id, viewed_at=now)
        db.add(entry)
    await db.flush()
    return entry


async def list_history(db: AsyncSession, user_id: str, limit: int = HISTORY_LIMIT) -> list[dict]:
    result = await db.execute(
        select(
            ProductView.id,
            ProductView.product_id,
            ProductView.viewed_at,
            Product.name,
            Product.price_cents,
            Product.image_url,
        )
        .join(Product, Product.id == ProductView.product_id)
        .where(ProductView.user_id == user_id)
        .order_by(ProductView.viewed_at.desc())
        .limit(limit)
    )
    return [
        {
            "id": row.id,
            "product_id": row.product_id,
            "viewed_at": row.viewed_at,
            "product_name": row.name,
            "price_cents": row.price_cents,
            "image_url": row.image_url,
        }
        for row in result.all()
    ]


async def clear_history(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(delete(ProductView).where(ProductView.user_id == user_id))
    logger.info("Cleared %d history entries for user %s", result.rowcount, user_id)
    return result.rowcount
