import logging
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from roxinho_shop.core.exceptions import NotFoundError
from roxinho_shop.core.search import ilike_escape
from roxinho_shop.models.dto.extraction import ProductRecord
from roxinho_shop.models.dto.product import ProductCreate
from roxinho_shop.models.orm.product import Product
from roxinho_shop.models.orm.review import Review
from roxinho_shop.services import category_service

logger = logging.getLogger(__name__)

_MUTABLE_PRODUCT_FIELDS = {
    "category_id", "name", "description", "brand", "model", "image_url",
    "image_gallery", "price_cents", "stock_quantity", "is_active",
}

VALID_SORTS = {"relevance", "price_asc", "price_desc", "name_asc", "rating", "newest"}


def _rating_subquery():
    return (
        select(Review.product_id, func.avg(Review.rating).label("avg_rating"))
        .group_by(Review.product_id)
        .subquery()
    )


async def search_products(
    db: AsyncSession,
    *,
    q: str | None = None,
    category_id: int | None = None,
    brand: str | None = None,
    price_min: float | None = None,
    price_max: float | None = None,
    in_stock: bool = False,
    sort: str = "relevance",
    page: int = 1,
    per_page: int = 20,
) -> dict:
    """Filtered, sorted and paginated listing of active products with facets.

    ``brand`` accepts a comma-separated list. Prices are in reais.
    """
    conditions = [Product.is_active.is_(True)]
    if category_id is not None:
        conditions.append(Product.category_id == category_id)
    if brand:
        brands = [b.strip() for b in brand.split(",") if b.strip()]
        if brands:
            conditions.append(Product.brand.in_(brands))
    if price_min is not None:
        conditions.append(Product.price_cents >= round(price_min * 100))
    if price_max is not None:
        conditions.append(Product.price_cents <= round(price_max * 100))
    if in_stock:
        conditions.append(Product.stock_quantity > 0)
    if q and q.strip():
        pattern = ilike_escape(q.strip())
        conditions.append(or_(
            Product.name.ilike(pattern),
            Product.description.ilike(pattern),
            Product.brand.ilike(pattern),
        ))
    where = and_(*conditions)

    total = (await db.execute(select(func.count()).select_from(Product).where(where))).scalar() or 0

    query = select(Product).where(where)
    if sort == "price_asc":
        query = query.order_by(Product.price_cents.asc())
    elif sort == "price_desc":
        query = query.order_by(Product.price_cents.desc())
    elif sort == "name_asc":
        query = query.order_by(Product.name.asc())
    elif sort == "rating":
        ratings = _rating_subquery()
        query = query.outerjoin(ratings, ratings.c.product_id == Product.id).order_by(
            ratings.c.avg_rating.desc().nulls_last(), Product.created_at.desc()
        )
    else:
        query = query.order_by(Product.created_at.desc())

    result = await db.execute(query.offset((page - 1) * per_page).limit(per_page))
    products = list(result.scalars().all())

    # Run sequentially, the coroutines share one session
    brands = await list_brands(db)
    price_range = (await db.execute(
        select(func.min(Product.price_cents), func.max(Product.price_cents))
        .where(Product.is_active.is_(True))
    )).one_or_none()

    return {
        "items": products,
        "total": total,
        "page": page,
        "per_page": per_page,
        "facets": {
            "brands": brands,
            "price_range": {
                "min_cents": (price_range[0] if price_range else None) or 0,
                "max_cents": (price_range[1] if price_range else None) or 0,
            },
        },
    }


async def list_brands(db: AsyncSession) -> list[dict]:
    """Distinct brands of active products with their product counts."""
    result = await db.execute(
        select(Product.brand, func.count())
        .where(Product.is_active.is_(True))
        .where(Product.brand.isnot(None), Product.brand != "")
        .group_by(Product.brand)
        .order_by(Product.brand)
    )
    return [{"value": b, "count": c} for b, c in result.all()]


async def list_related(db: AsyncSession, product_id: UUID, limit: int = 4) -> list[Product]:
    """Other active products from the same category, in random order."""
    product = await get_active(db, product_id)
    result = await db.execute(
        select(Product)
        .where(
            Product.is_active.is_(True),
            Product.category_id == product.category_id,
            Product.id != product.id,
        )
        .order_by(func.random())
        .limit(limit)
    )
    return list(result.scalars().all())


async def get_active(db: AsyncSession, product_id: UUID) -> Product:
    product = await db.get(Product, product_id)
    if not product or not product.is_active:
        raise NotFoundError("Produto não encontrado.")
    return product


async def create(db: AsyncSession, body: ProductCreate) -> Product:
    await category_service.ensure_exists(db, body.category_id)
    product = Product(
        category_id=body.category_id,
        name=body.name,
        description=body.description,
        brand=body.brand,
        model=body.model,
        image_url=body.image_url,
        image_gallery=list(body.image_gallery),
        price_cents=body.price_cents,
        stock_quantity=body.stock_quantity,
        source_url=body.source_url,
        is_active=body.is_active,
    )
    db.add(product)
    await db.flush()
    await db.refresh(product)
    return product


async def create_from_record(db: AsyncSession, record: ProductRecord) -> Product:
    """Persist a scraped product record as a new catalogue product."""
    await category_service.ensure_exists(db, record.category_id)
    product = Product(
        category_id=record.category_id,
        name=record.name,
        description=record.description,
        brand=record.brand,
        model=record.model,
        image_url=record.primary_image,
        image_gallery=list(record.image_gallery),
        price_cents=record.price_cents,
        stock_quantity=record.stock_quantity,
        source_platform=record.source_platform.value,
        source_url=record.source_url,
        external_id=record.external_id,
        is_active=record.active,
    )
    db.add(product)
    await db.flush()
    await db.refresh(product)
    logger.info(
        "Imported product %s from %s (%s)",
        product.id, record.source_platform.value, record.external_id or record.source_url,
    )
    return product


async def update(db: AsyncSession, product_id: UUID, data: dict) -> tuple[Product, dict]:
    product = await db.get(Product, product_id)
    if not product:
        raise NotFoundError("Produto não encontrado.")

    if data.get("category_id") is not None:
        await category_service.ensure_exists(db, data["category_id"])

    changes = {}
    for field, value in data.items():
        if field not in _MUTABLE_PRODUCT_FIELDS:
            continue
        if getattr(product, field) != value:
            changes[field] = value
            setattr(product, field, value)
    await db.flush()
    await db.refresh(product)
    return product, changes


async def deactivate(db: AsyncSession, product_id: UUID) -> Product:
    product = await db.get(Product, product_id)
    if not product:
        raise NotFoundError("Produto não encontrado.")
    product.is_active = False
    await db.flush()
    await db.refresh(product)
    return product
