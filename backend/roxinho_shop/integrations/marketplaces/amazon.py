import json
import logging
import re

from bs4 import BeautifulSoup

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

NAME_SELECTORS = [
    Selector("#productTitle"),
    Selector("h1 span#title"),
    meta("title", attribute="name"),
    meta("og:title"),
]

PRICE_SELECTORS = [
    Selector("span.a-price span.a-offscreen"),
    Selector("#priceblock_ourprice"),
    Selector("#priceblock_dealprice"),
    Selector("#kindle-price"),
    Selector(".a-color-price"),
]

DESCRIPTION_SELECTORS = [
    Selector("#productDescription p"),
    Selector("#feature-bullets ul"),
    meta("description", attribute="name"),
    meta("og:description"),
]

IMAGE_SELECTORS = [
    Selector("#landingImage", read_attr("src")),
    Selector("#imgTagWrapperId img", read_attr("src")),
    meta("og:image"),
    meta("twitter:image", attribute="name"),
]


def _extract_asin(url: str) -> str | None:
    """Extract ASIN from an Amazon product URL."""
    match = re.search(r"/dp/([A-Z0-9]{10})", url, re.IGNORECASE)
    if match:
        return match.group(1).upper()
    match = re.search(r"/gp/product/([A-Z0-9]{10})", url, re.IGNORECASE)
    if match:
        return match.group(1).upper()
    return None


def _gallery(soup: BeautifulSoup, image_url: str | None) -> list[str]:
    """Collect gallery URLs from the landing image's dynamic-image map."""
    landing = soup.select_one("#landingImage")
    raw = landing.get("data-a-dynamic-image") if landing else None
    if raw:
        try:
            images = json.loads(raw)
        except ValueError:
            images = None
        if isinstance(images, dict) and images:
            return [u for u in images if isinstance(u, str) and u]
    return [image_url] if image_url else []


def parse_page(html: str, url: str = "") -> RawProductFields:
    """Read product fields out of an Amazon product page."""
    soup = parse_html(html)
    image_url = first_text(soup, IMAGE_SELECTORS)
    return RawProductFields(
        name=first_text(soup, NAME_SELECTORS),
        price=first_valid(soup, PRICE_SELECTORS, parse_positive_price),
        description=first_text(soup, DESCRIPTION_SELECTORS),
        image_url=image_url,
        images=_gallery(soup, image_url),
        external_id=_extract_asin(url),
    )


class AmazonExtractor(HttpExtractor):
    """Scrapes Amazon product pages. Failures are raised, never retried."""

    platform = PlatformTag.AMAZON

    async def extract(self, url: str) -> RawProductFields:
        logger.info("Scraping Amazon page %s (asin=%s)", url, _extract_asin(url))
        html = await self._fetch_html(url)
        return parse_page(html, url)
