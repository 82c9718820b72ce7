import math

from roxinho_shop.integrations.marketplaces.models import PlatformTag, RawProductFields
from roxinho_shop.models.dto.extraction import ProductRecord

DEFAULT_DESCRIPTION = "Description unavailable."

DEFAULT_NAMES = {
    PlatformTag.MERCADOLIVRE: "Unknown Mercado Livre Product",
    PlatformTag.AMAZON: "Unknown Amazon Product",
    PlatformTag.GENERIC: "Unknown Product",
}


def _safe_price(value: float | None) -> float:
    if value is None or not math.isfinite(value) or value < 0:
        return 0.0
    return round(float(value), 2)


def normalize(
    raw: RawProductFields,
    platform: PlatformTag,
    url: str,
    category_id: int,
    placeholder_image_url: str,
) -> ProductRecord:
    """Build the canonical product record from raw extractor output."""
    price = _safe_price(raw.price)
    gallery = [u.strip() for u in raw.images if u and u.strip()]
    image = (raw.image_url or "").strip() or placeholder_image_url

    return ProductRecord(
        name=(raw.name or "").strip() or DEFAULT_NAMES[platform],
        price=price,
        description=(raw.description or "").strip() or DEFAULT_DESCRIPTION,
        primary_image=image,
        image_gallery=gallery,
        brand=raw.brand or None,
        model=raw.model or None,
        stock_quantity=max(raw.stock_quantity or 0, 0),
        category_id=category_id,
        source_platform=platform,
        source_url=url,
        source_price=price,
        external_id=raw.external_id,
        active=True,
    )
