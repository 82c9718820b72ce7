import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field

from roxinho_shop.integrations.marketplaces.models import PlatformTag


class ProductRecord(BaseModel):
    """Canonical, platform-agnostic product produced by the scraper."""

    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    description: str
    primary_image: str
    image_gallery: list[str] = []
    brand: str | None = None
    model: str | None = None
    stock_quantity: int = Field(default=0, ge=0)
    category_id: int
    source_platform: PlatformTag
    source_url: str
    source_price: float = Field(ge=0)
    external_id: str | None = None
    active: bool = True

    @computed_field
    @property
    def platform_prices(self) -> dict[str, float]:
        """Price keyed by source platform, e.g. ``{"amazon": 199.9}``."""
        return {self.source_platform.value: self.source_price}

    @property
    def image_gallery_json(self) -> str:
        return json.dumps(self.image_gallery)

    @property
    def price_cents(self) -> int:
        return int(round(self.price * 100))


class ExtractFromUrlRequest(BaseModel):
    # Loosely typed so a missing or non-string url gets the 400 failure body,
    # never a 422 validation error
    url: Any = None


class FailureKind(str, Enum):
    BAD_REQUEST = "bad_request"
    SERVER_ERROR = "server_error"


class ExtractionFailure(BaseModel):
    kind: FailureKind
    message: str
    error: str | None = None

    @property
    def status_code(self) -> int:
        return 400 if self.kind is FailureKind.BAD_REQUEST else 500


class ExtractionResult(BaseModel):
    success: bool
    product: ProductRecord | None = None
    platform: PlatformTag | None = None
    failure: ExtractionFailure | None = None

    @classmethod
    def ok(cls, product: ProductRecord, platform: PlatformTag) -> "ExtractionResult":
        return cls(success=True, product=product, platform=platform)

    @classmethod
    def fail(cls, kind: FailureKind, message: str, error: str | None = None) -> "ExtractionResult":
        return cls(success=False, failure=ExtractionFailure(kind=kind, message=message, error=error))


class ExtractFromUrlResponse(BaseModel):
    success: bool = True
    product: ProductRecord
    platform: str


class ExtractionErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str | None = None
