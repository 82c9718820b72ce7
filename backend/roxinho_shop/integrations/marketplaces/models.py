from enum import Enum

from pydantic import BaseModel


class PlatformTag(str, Enum):
    MERCADOLIVRE = "mercadolivre"
    AMAZON = "amazon"
    GENERIC = "generic"

    @property
    def wire_label(self) -> str:
        """Label the storefront frontend expects in scraper responses."""
        if self is PlatformTag.GENERIC:
            return "generico"
        return self.value


class RawProductFields(BaseModel):
    """Fields as read from a marketplace, before defaults are applied."""

    name: str | None = None
    price: float | None = None
    description: str | None = None
    image_url: str | None = None
    images: list[str] = []
    brand: str | None = None
    model: str | None = None
    stock_quantity: int | None = None
    external_id: str | None = None

    def is_empty(self) -> bool:
        return not any((self.name, self.price, self.description, self.image_url))
