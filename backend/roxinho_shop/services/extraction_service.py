"""Product extraction pipeline: URL in, canonical product record out.

Steps run once, in order, with no retries:
validate input -> detect platform -> extract -> classify -> normalize.
Every failure is converted to an ``ExtractionResult`` here so callers never
see a raw exception.
"""
import logging

import httpx

from roxinho_shop.core.config import Settings
from roxinho_shop.core.exceptions import ExtractionError, UnsupportedPlatformError
from roxinho_shop.integrations.marketplaces import build_extractor, detect_platform
from roxinho_shop.models.dto.extraction import ExtractionResult, FailureKind
from roxinho_shop.services.category_classifier import classify
from roxinho_shop.services.product_normalizer import normalize

logger = logging.getLogger(__name__)

URL_REQUIRED_MESSAGE = "URL é obrigatória"
EXTRACTION_FAILED_MESSAGE = "Erro ao processar a URL"


class ExtractionService:
    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self._settings = settings
        self._client = client

    async def extract_product(self, url: object) -> ExtractionResult:
        if not isinstance(url, str) or not url.strip():
            return ExtractionResult.fail(FailureKind.BAD_REQUEST, URL_REQUIRED_MESSAGE)
        url = url.strip()

        try:
            platform = detect_platform(url)
        except UnsupportedPlatformError as e:
            logger.info("Rejected unsupported URL %r", url)
            return ExtractionResult.fail(FailureKind.BAD_REQUEST, e.message)

        extractor = build_extractor(platform, self._settings, self._client)
        try:
            raw = await extractor.extract(url)
        except UnsupportedPlatformError as e:
            return ExtractionResult.fail(FailureKind.BAD_REQUEST, e.message)
        except ExtractionError as e:
            logger.warning("Extraction from %s failed: %s", platform.value, e)
            return ExtractionResult.fail(
                FailureKind.SERVER_ERROR, EXTRACTION_FAILED_MESSAGE, error=str(e),
            )
        except Exception as e:
            logger.exception("Unexpected error extracting %s", url)
            return ExtractionResult.fail(
                FailureKind.SERVER_ERROR, EXTRACTION_FAILED_MESSAGE, error=str(e),
            )

        category_id = classify(raw.name)
        record = normalize(
            raw, platform, url, int(category_id), self._settings.placeholder_image_url,
        )
        logger.info(
            "Extracted %r from %s (category=%d, price=%.2f)",
            record.name, platform.value, record.category_id, record.price,
        )
        return ExtractionResult.ok(record, platform)
