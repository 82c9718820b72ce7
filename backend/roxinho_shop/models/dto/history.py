from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, computed_field


class ProductViewCreate(BaseModel):
    product_id: UUID


class HistoryEntryResponse(BaseModel):
    id: UUID
    product_id: UUID
    viewed_at: datetime
    product_name: str
    price_cents: int
    image_url: str | None = None

    @computed_field
    @property
    def price(self) -> float:
        return self.price_cents / 100


class HistoryResponse(BaseModel):
    items: list[HistoryEntryResponse]
