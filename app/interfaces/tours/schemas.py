"""
Pydantic schemas for tour API request/response validation.

Request schemas forbid unknown fields and strip surrounding whitespace,
so operator-style keys and padding never reach the store.
No business logic belongs here.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.domain.tours.entities import Difficulty

NAME_MIN_LEN = 10
NAME_MAX_LEN = 40

_REQUEST_CONFIG = ConfigDict(extra="forbid", str_strip_whitespace=True)

# Columns that may be omitted from an update but never set to null
NON_NULLABLE_FIELDS = (
    "name",
    "duration",
    "max_group_size",
    "difficulty",
    "ratings_average",
    "ratings_quantity",
    "price",
    "summary",
    "image_cover",
)


def _check_discount(price: Optional[float], discount: Optional[float]) -> None:
    if price is not None and discount is not None and discount >= price:
        raise ValueError(f"Discount price ({discount}) should be below regular price")


class TourCreateRequest(BaseModel):
    """Request schema for creating a tour."""

    model_config = _REQUEST_CONFIG

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    duration: int = Field(..., gt=0, description="Length of the tour in days")
    max_group_size: int = Field(..., gt=0)
    difficulty: Difficulty
    ratings_average: float = Field(default=4.5, ge=1, le=5)
    ratings_quantity: int = Field(default=0, ge=0)
    price: float = Field(..., gt=0)
    price_discount: Optional[float] = Field(default=None, ge=0)
    summary: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_cover: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def discount_below_price(self) -> "TourCreateRequest":
        _check_discount(self.price, self.price_discount)
        return self


class TourUpdateRequest(BaseModel):
    """Request schema for a partial tour update. Only sent fields change."""

    model_config = _REQUEST_CONFIG

    name: Optional[str] = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    duration: Optional[int] = Field(default=None, gt=0)
    max_group_size: Optional[int] = Field(default=None, gt=0)
    difficulty: Optional[Difficulty] = None
    ratings_average: Optional[float] = Field(default=None, ge=1, le=5)
    ratings_quantity: Optional[int] = Field(default=None, ge=0)
    price: Optional[float] = Field(default=None, gt=0)
    price_discount: Optional[float] = Field(default=None, ge=0)
    summary: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    image_cover: Optional[str] = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def required_fields_not_null(self) -> "TourUpdateRequest":
        nulled = [
            name
            for name in NON_NULLABLE_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        _check_discount(self.price, self.price_discount)
        return self


class TourItem(BaseModel):
    """A tour as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    duration: int
    max_group_size: int
    difficulty: Difficulty
    ratings_average: float
    ratings_quantity: int
    price: float
    price_discount: Optional[float] = None
    summary: str
    description: Optional[str] = None
    image_cover: str
    created_at: datetime


class TourData(BaseModel):
    tour: TourItem


class TourResponse(BaseModel):
    """Response schema for single-tour endpoints."""

    status: str = "success"
    data: TourData


class TourListData(BaseModel):
    tours: list[TourItem]


class TourListResponse(BaseModel):
    """Response schema for the tour listing endpoint."""

    status: str = "success"
    requested_at: Optional[str] = None
    results: int
    data: TourListData


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Shape of every user-safe error response."""

    status: str = Field(..., description='"fail" for client errors, "error" otherwise')
    message: str
