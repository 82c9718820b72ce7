import httpx

from roxinho_shop.core.config import Settings
from roxinho_shop.integrations.marketplaces.amazon import AmazonExtractor
from roxinho_shop.integrations.marketplaces.base import HttpExtractor, ProductExtractorProtocol
from roxinho_shop.integrations.marketplaces.generic import GenericExtractor
from roxinho_shop.integrations.marketplaces.mercadolivre import MercadoLivreExtractor
from roxinho_shop.integrations.marketplaces.models import PlatformTag, RawProductFields
from roxinho_shop.integrations.marketplaces.platform import detect_platform

EXTRACTORS: dict[PlatformTag, type[HttpExtractor]] = {
    PlatformTag.MERCADOLIVRE: MercadoLivreExtractor,
    PlatformTag.AMAZON: AmazonExtractor,
    PlatformTag.GENERIC: GenericExtractor,
}


def build_extractor(
    platform: PlatformTag,
    settings: Settings,
    client: httpx.AsyncClient | None = None,
) -> ProductExtractorProtocol:
    return EXTRACTORS[platform](settings, client)


__all__ = [
    "AmazonExtractor",
    "GenericExtractor",
    "MercadoLivreExtractor",
    "PlatformTag",
    "ProductExtractorProtocol",
    "RawProductFields",
    "build_extractor",
    "detect_platform",
]
