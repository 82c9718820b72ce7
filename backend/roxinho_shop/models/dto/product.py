import math
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, computed_field, field_validator

from roxinho_shop.core.validators import validate_http_url


class ProductCreate(BaseModel):
    category_id: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=500)
    description: str | None = None
    brand: str | None = None
    model: str | None = None
    image_url: str | None = None
    image_gallery: list[str] = []
    price_cents: int = Field(ge=0)
    stock_quantity: int = Field(default=0, ge=0)
    source_url: str | None = None
    is_active: bool = True

    @field_validator("source_url", "image_url")
    @classmethod
    def validate_url_scheme(cls, v: str | None) -> str | None:
        return validate_http_url(v)


class ProductUpdate(BaseModel):
    category_id: int | None = Field(default=None, ge=1)
    name: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    brand: str | None = None
    model: str | None = None
    image_url: str | None = None
    image_gallery: list[str] | None = None
    price_cents: int | None = Field(default=None, ge=0)
    stock_quantity: int | None = Field(default=None, ge=0)
    is_active: bool | None = None

    @field_validator("image_url")
    @classmethod
    def validate_url_scheme(cls, v: str | None) -> str | None:
        return validate_http_url(v)


class ProductResponse(BaseModel):
    id: UUID
    category_id: int
    name: str
    description: str | None = None
    brand: str | None = None
    model: str | None = None
    image_url: str | None = None
    image_gallery: list[str] | None = None
    price_cents: int
    stock_quantity: int = 0
    source_platform: str | None = None
    source_url: str | None = None
    external_id: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def price(self) -> float:
        return self.price_cents / 100


class ProductListResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    page: int
    per_page: int
    facets: dict[str, Any] | None = None

    @computed_field
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.per_page) if self.per_page else 0


class BrandFacet(BaseModel):
    value: str
    count: int


class ProductImportResponse(BaseModel):
    success: bool = True
    product: ProductResponse
    platform: str
