"""Catalog domain schemas.

Request, filter and response schemas for base products. These are plain
Pydantic models since SQLModel reserves the ``metadata`` attribute.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    model_validator,
)

from app.catalog.models import Currency, ProductCategory
from app.core.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.user.schemas import serialize_utc

MAX_PRICE = 99_999_999.99


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class PrintAreaCreate(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    x: float = Field(ge=0)
    y: float = Field(ge=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    mockup_url: str = Field(min_length=1, max_length=1024)
    dpi: int = Field(default=300, gt=0)


class ProductDimensions(BaseModel):
    length_cm: float | None = Field(default=None, ge=0)
    width_cm: float | None = Field(default=None, ge=0)
    height_cm: float | None = Field(default=None, ge=0)


class ProductMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    material: str | None = None
    care_instructions: str | None = None
    weight_grams: float | None = Field(default=None, ge=0)
    dimensions: ProductDimensions | None = None


class ProductCreate(BaseModel):
    """Request schema for creating a base product with its print areas."""

    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    brand: str = Field(min_length=1, max_length=100)
    type: str | None = Field(default=None, max_length=100)
    category: ProductCategory | None = None
    material: str | None = Field(default=None, max_length=255)
    base_cost: float = Field(gt=0, le=MAX_PRICE)
    currency: Currency = Currency.USD
    country: str | None = Field(default=None, max_length=100)
    main_image: str | None = Field(default=None, max_length=1024)
    colors: list[str] = Field(min_length=1)
    available_sizes: list[str] | dict[str, int]
    tags: list[str] | None = None
    metadata: ProductMetadata | None = None
    print_areas: list[PrintAreaCreate] = Field(min_length=1)


# Columns that cannot be cleared through a patch
_NOT_NULLABLE = (
    "title",
    "brand",
    "base_cost",
    "currency",
    "colors",
    "available_sizes",
    "print_areas",
)


class ProductUpdate(BaseModel):
    """Partial update. print_areas, when present, replaces all existing areas."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    brand: str | None = Field(default=None, min_length=1, max_length=100)
    type: str | None = Field(default=None, max_length=100)
    category: ProductCategory | None = None
    material: str | None = Field(default=None, max_length=255)
    base_cost: float | None = Field(default=None, gt=0, le=MAX_PRICE)
    currency: Currency | None = None
    country: str | None = Field(default=None, max_length=100)
    main_image: str | None = Field(default=None, max_length=1024)
    colors: list[str] | None = Field(default=None, min_length=1)
    available_sizes: list[str] | dict[str, int] | None = None
    tags: list[str] | None = None
    metadata: ProductMetadata | None = None
    print_areas: list[PrintAreaCreate] | None = Field(default=None, min_length=1)

    @model_validator(mode="before")
    @classmethod
    def reject_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for name in _NOT_NULLABLE:
                if name in data and data[name] is None:
                    raise ValueError(f"{name} cannot be null")
        return data


class ProductFilters(BaseModel):
    """Optional, conjunctive listing filters."""

    search: str | None = Field(default=None, max_length=200)
    category: ProductCategory | None = None
    brand: str | None = None
    color: str | None = None
    size: str | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    country: str | None = None
    material: str | None = None
    tags: list[str] | None = None


class PrintAreaRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str | None
    x: float
    y: float
    width: float
    height: float
    mockup_url: str
    dpi: int


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str | None
    brand: str
    type: str | None
    category: ProductCategory | None
    material: str | None
    base_cost: float
    currency: Currency
    country: str | None
    main_image: str | None
    colors: list[str]
    available_sizes: list[str] | dict[str, int]
    tags: list[str] | None
    metadata: dict[str, Any] | None = Field(
        validation_alias=AliasChoices("product_metadata", "metadata")
    )
    print_areas: list[PrintAreaRead]
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, value: datetime) -> str:
        return serialize_utc(value)


class ProductPage(BaseModel):
    items: list[ProductRead]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_previous: bool


class PriceRange(BaseModel):
    min: float
    max: float


class CategoryCount(BaseModel):
    category: ProductCategory | None
    count: int


class BrandCount(BaseModel):
    brand: str
    count: int


class CatalogStats(BaseModel):
    """Aggregates over products that are not soft-deleted."""

    total_products: int
    categories_count: int
    brands_count: int
    average_price: float
    price_range: PriceRange
    by_category: list[CategoryCount]
    by_brand: list[BrandCount]


class ProductListParams(ProductFilters):
    """Query string for product listings: filters plus sorting and paging."""

    sort_by: str | None = Field(default=None, max_length=50)
    sort_order: SortOrder = SortOrder.desc
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
