from roxinho_shop.core.exceptions import UnsupportedPlatformError
from roxinho_shop.core.validators import is_http_url
from roxinho_shop.integrations.marketplaces.models import PlatformTag

# Checked in order; hostname substrings per marketplace.
PLATFORM_HOSTS: list[tuple[PlatformTag, tuple[str, ...]]] = [
    (PlatformTag.MERCADOLIVRE, ("mercadolivre.com.br", "mercadolibre.com")),
    (PlatformTag.AMAZON, ("amazon.com.br", "amazon.com")),
]


def detect_platform(url: str) -> PlatformTag:
    """Classify a product URL by marketplace.

    Unknown retailers are tagged ``GENERIC`` so the best-effort scraper can
    try them. Only strings that are not http(s) URLs at all are rejected.
    """
    if not url or not is_http_url(url):
        raise UnsupportedPlatformError(
            "URL não suportada. Use um link http(s) de produto."
        )
    lowered = url.lower()
    for platform, hosts in PLATFORM_HOSTS:
        if any(host in lowered for host in hosts):
            return platform
    return PlatformTag.GENERIC
