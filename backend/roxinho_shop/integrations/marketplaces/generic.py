import logging

from roxinho_shop.core.exceptions import UnsupportedPlatformError
from roxinho_shop.integrations.marketplaces.base import HttpExtractor
from roxinho_shop.integrations.marketplaces.models import PlatformTag, RawProductFields
from roxinho_shop.integrations.marketplaces.pricing import parse_positive_price
from roxinho_shop.integrations.marketplaces.selectors import (
    Selector,
    first_text,
    first_valid,
    meta,
    parse_html,
    read_attr,
)

logger = logging.getLogger(__name__)

# Structured metadata first, page-specific class names last.
NAME_SELECTORS = [
    meta("og:title"),
    meta("twitter:title", attribute="name"),
    Selector('[itemprop="name"]'),
    Selector("h1"),
    Selector("title"),
]

PRICE_SELECTORS = [
    meta("product:price:amount"),
    meta("og:price:amount"),
    Selector('meta[itemprop="price"]', read_attr("content")),
    Selector('[itemprop="price"]', read_attr("content")),
    Selector('[itemprop="price"]'),
    Selector('[class*="price"]'),
]

DESCRIPTION_SELECTORS = [
    meta("og:description"),
    meta("description", attribute="name"),
    Selector('[itemprop="description"]'),
    Selector('[class*="description"]'),
]

IMAGE_SELECTORS = [
    meta("og:image"),
    meta("og:image:url"),
    meta("twitter:image", attribute="name"),
    Selector('link[rel="image_src"]', read_attr("href")),
    Selector('img[itemprop="image"]', read_attr("src")),
    Selector('img[class*="product"]', read_attr("src")),
]


def parse_page(html: str) -> RawProductFields:
    """Best-effort product fields from an arbitrary retailer page."""
    soup = parse_html(html)
    image_url = first_text(soup, IMAGE_SELECTORS)
    return RawProductFields(
        name=first_text(soup, NAME_SELECTORS),
        price=first_valid(soup, PRICE_SELECTORS, parse_positive_price),
        description=first_text(soup, DESCRIPTION_SELECTORS),
        image_url=image_url,
        images=[image_url] if image_url else [],
    )


class GenericExtractor(HttpExtractor):
    """Fallback scraper for retailers without a dedicated extractor."""

    platform = PlatformTag.GENERIC

    async def extract(self, url: str) -> RawProductFields:
        logger.info("Scraping generic product page %s", url)
        html = await self._fetch_html(url)
        raw = parse_page(html)
        if raw.is_empty():
            logger.warning("No product data found on %s", url)
            raise UnsupportedPlatformError(
                "Não foi possível identificar um produto nesta URL."
            )
        return raw
