import logging
import re

from roxinho_shop.core.exceptions import ExtractionError
from roxinho_shop.integrations.marketplaces.base import HttpExtractor
from roxinho_shop.integrations.marketplaces.models import PlatformTag, RawProductFields

logger = logging.getLogger(__name__)

_MLB_ID_RE = re.compile(r"MLB-?(\d+)", re.IGNORECASE)


def _extract_item_id(url: str) -> str | None:
    """Extract the MLB listing id from a Mercado Livre URL, e.g. 'MLB123456'."""
    match = _MLB_ID_RE.search(url)
    if not match:
        return None
    return f"MLB{match.group(1)}"


def _find_attribute(attributes: list, attribute_id: str) -> str | None:
    for attr in attributes or []:
        if isinstance(attr, dict) and attr.get("id") == attribute_id:
            return attr.get("value_name") or None
    return None


def _to_float(value) -> float | None:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _to_int(value) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def parse_item(data: dict, item_id: str | None = None) -> RawProductFields:
    """Map a Mercado Livre ``/items/{id}`` payload onto raw product fields."""
    pictures = [
        p["url"] for p in data.get("pictures") or []
        if isinstance(p, dict) and p.get("url")
    ]
    image = data.get("thumbnail") or (pictures[0] if pictures else None) or data.get("secure_thumbnail")
    attributes = data.get("attributes") or []

    return RawProductFields(
        name=data.get("title"),
        price=_to_float(data.get("price")),
        description=data.get("plain_text") or data.get("subtitle") or None,
        image_url=image,
        images=pictures,
        brand=_find_attribute(attributes, "BRAND"),
        model=_find_attribute(attributes, "MODEL"),
        stock_quantity=_to_int(data.get("available_quantity")),
        external_id=data.get("id") or item_id,
    )


class MercadoLivreExtractor(HttpExtractor):
    """Reads listings through the public Mercado Livre items API."""

    platform = PlatformTag.MERCADOLIVRE

    async def extract(self, url: str) -> RawProductFields:
        item_id = _extract_item_id(url)
        if not item_id:
            raise ExtractionError("ID not found")

        api_url = f"{self._settings.mercadolivre_api_base.rstrip('/')}/items/{item_id}"
        logger.info("Fetching Mercado Livre item %s", item_id)
        resp = await self._get(api_url, headers={"Accept": "application/json"})
        if not resp.is_success:
            logger.warning("Mercado Livre API returned HTTP %d for %s", resp.status_code, item_id)
            raise ExtractionError("item not found", resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise ExtractionError("Invalid response from Mercado Livre API", resp.status_code) from e
        if not isinstance(data, dict):
            raise ExtractionError("Invalid response from Mercado Livre API", resp.status_code)

        return parse_item(data, item_id)
