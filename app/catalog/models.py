"""Catalog domain models.

A base product is a blank item (t-shirt, mug, ...) that creators print on.
Each product has one or more printable areas, kept in insertion order.
"""

import uuid
from enum import Enum
from typing import Any

from sqlalchemy import JSON, CheckConstraint, Column, Numeric, Text, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from app.core.mixins import SoftDeleteMixin, TimestampMixin


class ProductCategory(str, Enum):
    tshirts = "tshirts"
    hoodies = "hoodies"
    totebags = "totebags"
    mugs = "mugs"
    other = "other"


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    AED = "AED"
    SAR = "SAR"


class BaseProduct(TimestampMixin, SoftDeleteMixin, SQLModel, table=True):
    """Base product database model.

    (title, brand) is unique across all rows, soft-deleted ones included.
    """

    __tablename__: str = "base_products"
    __table_args__ = (
        UniqueConstraint("title", "brand", name="uq_base_products_title_brand"),
        CheckConstraint("base_cost > 0", name="ck_base_products_base_cost_positive"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(index=True, max_length=255)
    description: str | None = Field(default=None, sa_type=Text)
    brand: str = Field(index=True, max_length=100)
    type: str | None = Field(default=None, max_length=100)
    category: ProductCategory | None = Field(default=None, index=True)
    material: str | None = Field(default=None, max_length=255)
    base_cost: float = Field(sa_type=Numeric(10, 2, asdecimal=False))
    currency: Currency = Field(default=Currency.USD)
    country: str | None = Field(default=None, max_length=100)
    main_image: str | None = Field(default=None, max_length=1024)
    colors: list[str] = Field(default_factory=list, sa_type=JSON)
    available_sizes: list[str] | dict[str, int] = Field(
        default_factory=list, sa_type=JSON
    )
    tags: list[str] | None = Field(default=None, sa_type=JSON)
    # "metadata" is reserved on declarative classes
    product_metadata: dict[str, Any] | None = Field(
        default=None, sa_column=Column("metadata", JSON, nullable=True)
    )

    print_areas: list["PrintableArea"] = Relationship(
        back_populates="base_product",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "lazy": "selectin",
            "order_by": "PrintableArea.position",
        },
    )


class PrintableArea(TimestampMixin, SQLModel, table=True):
    """Region of a base product that can be printed on, in mockup pixels."""

    __tablename__: str = "printable_areas"
    __table_args__ = (
        CheckConstraint("x >= 0", name="ck_printable_areas_x"),
        CheckConstraint("y >= 0", name="ck_printable_areas_y"),
        CheckConstraint("width > 0", name="ck_printable_areas_width"),
        CheckConstraint("height > 0", name="ck_printable_areas_height"),
        CheckConstraint("dpi > 0", name="ck_printable_areas_dpi"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str | None = Field(default=None, max_length=100)
    x: float = Field(sa_type=Numeric(10, 2, asdecimal=False))
    y: float = Field(sa_type=Numeric(10, 2, asdecimal=False))
    width: float = Field(sa_type=Numeric(10, 2, asdecimal=False))
    height: float = Field(sa_type=Numeric(10, 2, asdecimal=False))
    mockup_url: str = Field(max_length=1024)
    dpi: int = Field(default=300)
    position: int = Field(default=0)
    base_product_id: uuid.UUID = Field(
        foreign_key="base_products.id", ondelete="CASCADE", index=True
    )

    base_product: BaseProduct | None = Relationship(back_populates="print_areas")
