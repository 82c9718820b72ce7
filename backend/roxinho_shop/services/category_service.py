import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from roxinho_shop.core.exceptions import BadRequestError, ConflictError, NotFoundError
from roxinho_shop.models.dto.category import CategoryCreate
from roxinho_shop.models.orm.category import Category
from roxinho_shop.models.orm.product import Product
from roxinho_shop.services.category_classifier import CategoryId

logger = logging.getLogger(__name__)

# (id, name, slug, icon)
DEFAULT_CATEGORIES: list[tuple[CategoryId, str, str, str]] = [
    (CategoryId.HARDWARE, "Hardware", "hardware", "cpu"),
    (CategoryId.PERIPHERALS, "Periféricos", "perifericos", "mouse"),
    (CategoryId.COMPUTERS, "Computadores", "computadores", "laptop"),
    (CategoryId.GAMES, "Games", "games", "gamepad"),
    (CategoryId.MOBILE, "Celulares e Smartphones", "celulares", "smartphone"),
    (CategoryId.TV_AUDIO, "TV e Áudio", "tv-audio", "tv"),
    (CategoryId.SPEAKERS, "Caixas de Som", "caixas-de-som", "speaker"),
    (CategoryId.GAMER_FURNITURE, "Espaço Gamer", "espaco-gamer", "chair"),
    (CategoryId.SMART_HOME, "Casa Inteligente", "casa-inteligente", "home"),
    (CategoryId.POWER, "Energia", "energia", "battery"),
]


async def seed_defaults(db: AsyncSession) -> int:
    """Insert any missing storefront categories. Returns the number created."""
    result = await db.execute(select(Category.id))
    existing = set(result.scalars().all())
    created = 0
    for sort_order, (category_id, name, slug, icon) in enumerate(DEFAULT_CATEGORIES):
        if int(category_id) in existing:
            continue
        db.add(Category(
            id=int(category_id), name=name, slug=slug, icon=icon,
            sort_order=sort_order, is_active=True,
        ))
        created += 1
    if created:
        await db.flush()
        logger.info("Seeded %d default categories", created)
    return created


async def list_active(db: AsyncSession) -> list[Category]:
    result = await db.execute(
        select(Category)
        .where(Category.is_active.is_(True))
        .order_by(Category.sort_order, Category.name)
    )
    return list(result.scalars().all())


async def get_by_slug(db: AsyncSession, slug: str) -> Category:
    result = await db.execute(
        select(Category).where(Category.slug == slug, Category.is_active.is_(True))
    )
    category = result.scalar_one_or_none()
    if not category:
        raise NotFoundError("Categoria não encontrada.")
    return category


async def ensure_exists(db: AsyncSession, category_id: int) -> Category:
    category = await db.get(Category, category_id)
    if not category:
        raise NotFoundError("Categoria não encontrada.")
    return category


async def list_all(db: AsyncSession) -> list[Category]:
    """All categories, inactive included, for the admin screens."""
    result = await db.execute(select(Category).order_by(Category.sort_order, Category.name))
    return list(result.scalars().all())


async def _ensure_slug_free(db: AsyncSession, slug: str, exclude_id: int | None = None) -> None:
    query = select(Category.id).where(Category.slug == slug)
    if exclude_id is not None:
        query = query.where(Category.id != exclude_id)
    if (await db.execute(query)).scalar_one_or_none() is not None:
        raise ConflictError("Slug já existe. Escolha outro.")


async def create(db: AsyncSession, body: CategoryCreate) -> Category:
    await _ensure_slug_free(db, body.slug)

    # Ids are not generated by the database, new ones continue after the highest
    max_id = (await db.execute(select(func.max(Category.id)))).scalar() or 0
    category = Category(
        id=max(max_id, max(int(c) for c in CategoryId)) + 1,
        name=body.name,
        slug=body.slug,
        description=body.description,
        icon=body.icon,
        sort_order=body.sort_order,
        is_active=True,
    )
    db.add(category)
    await db.flush()
    await db.refresh(category)
    logger.info("Created category %d (%s)", category.id, category.slug)
    return category


async def update(db: AsyncSession, category_id: int, data: dict) -> Category:
    category = await ensure_exists(db, category_id)

    if data.get("slug") and data["slug"] != category.slug:
        await _ensure_slug_free(db, data["slug"], exclude_id=category_id)
    if data.get("is_active") is False:
        await _ensure_can_deactivate(db, category)

    for field in ("name", "slug", "description", "icon", "sort_order", "is_active"):
        if field in data and data[field] is not None:
            setattr(category, field, data[field])
    await db.flush()
    await db.refresh(category)
    return category


async def _ensure_can_deactivate(db: AsyncSession, category: Category) -> None:
    # Imported products are always classified into the fixed categories
    if category.id in {int(c) for c in CategoryId}:
        raise BadRequestError("Categorias padrão não podem ser desativadas.")
    count = (await db.execute(
        select(func.count())
        .select_from(Product)
        .where(Product.category_id == category.id, Product.is_active.is_(True))
    )).scalar() or 0
    if count:
        raise BadRequestError(
            f"Não é possível desativar esta categoria. "
            f"Existem {count} produto(s) ativos usando-a."
        )


async def deactivate(db: AsyncSession, category_id: int) -> Category:
    category = await ensure_exists(db, category_id)
    await _ensure_can_deactivate(db, category)
    category.is_active = False
    await db.flush()
    return category
