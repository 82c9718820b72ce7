from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    product_id: UUID
    rating: int = Field(ge=1, le=5)
    title: str | None = Field(default=None, max_length=200)
    comment: str | None = Field(default=None, max_length=5000)


class ReviewUpdate(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    title: str | None = Field(default=None, max_length=200)
    comment: str | None = Field(default=None, max_length=5000)


class ReviewVoteRequest(BaseModel):
    helpful: bool = True


class ReviewVoteResponse(BaseModel):
    helpful_count: int


class ReviewResponse(BaseModel):
    id: UUID
    product_id: UUID
    user_id: str
    user_name: str | None = None
    rating: int
    title: str | None = None
    comment: str | None = None
    helpful_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class ReviewStats(BaseModel):
    total: int = 0
    average: float | None = None
    # star rating -> number of reviews, always keyed 1..5
    distribution: dict[int, int] = {}


class ReviewListResponse(BaseModel):
    items: list[ReviewResponse]
    stats: ReviewStats
