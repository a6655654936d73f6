"""Catalog query engine and product lifecycle.

Listing applies optional, conjunctive filters over products that are not
soft-deleted, sorts by an allow-listed column and paginates. JSON list
columns (colors, sizes, tags) are matched on their serialized text so the
same queries run on SQLite and PostgreSQL.
"""

import json
import logging
import uuid
from typing import Any

from sqlalchemy import String, cast, distinct, func, or_
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import Session, col, select

from app.catalog.exceptions import ProductExistsError, ProductNotFoundError
from app.catalog.models import BaseProduct, PrintableArea, ProductCategory
from app.catalog.schemas import (
    BrandCount,
    CatalogStats,
    CategoryCount,
    PriceRange,
    PrintAreaCreate,
    ProductCreate,
    ProductListParams,
    ProductPage,
    ProductRead,
    ProductUpdate,
    SortOrder,
)
from app.core.mixins import utc_now
from app.core.pagination import paginate, total_pages
from app.db.commit import commit_or_conflict

logger = logging.getLogger(__name__)

SORT_COLUMNS: dict[str, Any] = {
    "title": BaseProduct.title,
    "base_cost": BaseProduct.base_cost,
    "cost": BaseProduct.base_cost,
    "created_at": BaseProduct.created_at,
    "createdAt": BaseProduct.created_at,
    "updated_at": BaseProduct.updated_at,
    "updatedAt": BaseProduct.updated_at,
}
DEFAULT_SORT_COLUMN = BaseProduct.created_at

_LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )


def _contains(column: Any, text: str) -> ColumnElement[bool]:
    """Case-insensitive substring match."""
    return col(column).ilike(f"%{_escape_like(text)}%", escape=_LIKE_ESCAPE)


def _json_has_member(column: Any, value: str) -> ColumnElement[bool]:
    """True when a JSON list holds ``value`` or a JSON object has it as a key."""
    token = _escape_like(json.dumps(value))
    return cast(column, String).like(f"%{token}%", escape=_LIKE_ESCAPE)


def _product_name_taken(
    session: Session, title: str, brand: str, exclude_id: uuid.UUID | None = None
) -> bool:
    statement = select(BaseProduct.id).where(
        BaseProduct.title == title, BaseProduct.brand == brand
    )
    if exclude_id is not None:
        statement = statement.where(BaseProduct.id != exclude_id)
    return session.exec(statement).first() is not None


def _build_print_areas(areas: list[PrintAreaCreate]) -> list[PrintableArea]:
    return [
        PrintableArea(**area.model_dump(), position=position)
        for position, area in enumerate(areas)
    ]


def list_products(
    session: Session, params: ProductListParams | None = None
) -> ProductPage:
    """One page of non-deleted products matching every given filter.

    Unknown ``sort_by`` values fall back to creation time.
    """
    params = params or ProductListParams()
    statement = select(BaseProduct).where(col(BaseProduct.deleted_at).is_(None))

    if params.search:
        statement = statement.where(
            or_(
                _contains(BaseProduct.title, params.search),
                _contains(BaseProduct.description, params.search),
            )
        )
    if params.category is not None:
        statement = statement.where(BaseProduct.category == params.category)
    if params.brand:
        statement = statement.where(BaseProduct.brand == params.brand)
    if params.color:
        statement = statement.where(_json_has_member(BaseProduct.colors, params.color))
    if params.size:
        statement = statement.where(
            _json_has_member(BaseProduct.available_sizes, params.size)
        )
    if params.min_price is not None:
        statement = statement.where(BaseProduct.base_cost >= params.min_price)
    if params.max_price is not None:
        statement = statement.where(BaseProduct.base_cost <= params.max_price)
    if params.country:
        statement = statement.where(BaseProduct.country == params.country)
    if params.material:
        statement = statement.where(_contains(BaseProduct.material, params.material))
    if params.tags:
        statement = statement.where(
            or_(*(_json_has_member(BaseProduct.tags, tag) for tag in params.tags))
        )

    sort_column = col(SORT_COLUMNS.get(params.sort_by or "", DEFAULT_SORT_COLUMN))
    if params.sort_order == SortOrder.asc:
        statement = statement.order_by(sort_column.asc(), col(BaseProduct.id).asc())
    else:
        statement = statement.order_by(sort_column.desc(), col(BaseProduct.id).desc())

    products, total = paginate(session, statement, params.page, params.limit)
    pages = total_pages(total, params.limit)
    return ProductPage(
        items=[ProductRead.model_validate(product) for product in products],
        total=total,
        page=params.page,
        limit=params.limit,
        total_pages=pages,
        has_next=params.page < pages,
        has_previous=params.page > 1,
    )


def _with(params: ProductListParams | None, **update: Any) -> ProductListParams:
    return (params or ProductListParams()).model_copy(update=update)


def search_products(
    session: Session, query: str, params: ProductListParams | None = None
) -> ProductPage:
    return list_products(session, _with(params, search=query))


def list_by_category(
    session: Session,
    category: ProductCategory,
    params: ProductListParams | None = None,
) -> ProductPage:
    return list_products(session, _with(params, category=category))


def list_by_brand(
    session: Session, brand: str, params: ProductListParams | None = None
) -> ProductPage:
    return list_products(session, _with(params, brand=brand))


def get_product(session: Session, product_id: uuid.UUID) -> BaseProduct:
    """Raises ProductNotFoundError for unknown or soft-deleted products."""
    product = session.get(BaseProduct, product_id)
    if product is None or product.is_deleted:
        raise ProductNotFoundError()
    return product


def create_product(session: Session, data: ProductCreate) -> BaseProduct:
    """Create a product and its print areas in one transaction.

    Raises:
        ProductExistsError: If (title, brand) is already used
    """
    if _product_name_taken(session, data.title, data.brand):
        raise ProductExistsError(
            f'Product with title "{data.title}" already exists '
            f'for brand "{data.brand}"'
        )

    fields = data.model_dump(exclude={"print_areas", "metadata"})
    product = BaseProduct(
        **fields,
        product_metadata=(
            data.metadata.model_dump(exclude_none=True) if data.metadata else None
        ),
    )
    product.print_areas = _build_print_areas(data.print_areas)
    session.add(product)
    commit_or_conflict(session, ProductExistsError())
    session.refresh(product)
    logger.info(
        "Product created: %s (%s / %s)", product.id, product.title, product.brand
    )
    return product


def update_product(
    session: Session, product_id: uuid.UUID, data: ProductUpdate
) -> BaseProduct:
    """Apply a partial update.

    (title, brand) uniqueness is only re-checked when the patch touches title
    or brand. Print areas, when given, replace the existing ones wholesale.

    Raises:
        ProductNotFoundError: If the product is unknown or soft-deleted
        ProductExistsError: If the new (title, brand) is already used
    """
    product = get_product(session, product_id)
    changes = data.model_dump(exclude_unset=True, exclude={"print_areas", "metadata"})

    if "title" in changes or "brand" in changes:
        title = changes.get("title", product.title)
        brand = changes.get("brand", product.brand)
        if _product_name_taken(session, title, brand, exclude_id=product.id):
            raise ProductExistsError(
                f'Product with title "{title}" already exists for brand "{brand}"'
            )

    for key, value in changes.items():
        setattr(product, key, value)
    if "metadata" in data.model_fields_set:
        product.product_metadata = (
            data.metadata.model_dump(exclude_none=True) if data.metadata else None
        )
    if data.print_areas is not None:
        product.print_areas = _build_print_areas(data.print_areas)

    session.add(product)
    commit_or_conflict(session, ProductExistsError())
    session.refresh(product)
    logger.info("Product updated: %s", product.id)
    return product


def soft_delete_product(session: Session, product_id: uuid.UUID) -> None:
    product = get_product(session, product_id)
    product.deleted_at = utc_now()
    session.add(product)
    session.commit()
    logger.info("Product soft-deleted: %s", product_id)


def restore_product(session: Session, product_id: uuid.UUID) -> BaseProduct:
    """Undo a soft delete. Restoring a live product returns it unchanged.

    Raises:
        ProductNotFoundError: If no product has ``product_id``
    """
    product = session.get(BaseProduct, product_id)
    if product is None:
        raise ProductNotFoundError()
    if product.is_deleted:
        product.deleted_at = None
        session.add(product)
        session.commit()
        session.refresh(product)
        logger.info("Product restored: %s", product_id)
    return product


def hard_delete_product(session: Session, product_id: uuid.UUID) -> None:
    """Permanently delete a product (soft-deleted or not) and its print areas."""
    product = session.get(BaseProduct, product_id)
    if product is None:
        raise ProductNotFoundError()
    session.delete(product)
    session.commit()
    logger.warning("Product permanently deleted: %s", product_id)


def get_catalog_stats(session: Session) -> CatalogStats:
    """Aggregate counts and prices over non-deleted products."""
    live = col(BaseProduct.deleted_at).is_(None)

    total, categories, brands, average, minimum, maximum = session.exec(
        select(
            func.count(col(BaseProduct.id)),
            func.count(distinct(BaseProduct.category)),
            func.count(distinct(BaseProduct.brand)),
            func.avg(BaseProduct.base_cost),
            func.min(BaseProduct.base_cost),
            func.max(BaseProduct.base_cost),
        ).where(live)
    ).one()

    by_category = session.exec(
        select(BaseProduct.category, func.count(col(BaseProduct.id)))
        .where(live)
        .group_by(BaseProduct.category)
        .order_by(BaseProduct.category)
    ).all()
    by_brand = session.exec(
        select(BaseProduct.brand, func.count(col(BaseProduct.id)))
        .where(live)
        .group_by(BaseProduct.brand)
        .order_by(BaseProduct.brand)
    ).all()

    return CatalogStats(
        total_products=total,
        categories_count=categories,
        brands_count=brands,
        average_price=round(float(average or 0), 2),
        price_range=PriceRange(min=float(minimum or 0), max=float(maximum or 0)),
        by_category=[
            CategoryCount(category=category, count=count)
            for category, count in by_category
        ],
        by_brand=[BrandCount(brand=brand, count=count) for brand, count in by_brand],
    )
