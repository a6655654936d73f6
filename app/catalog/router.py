"""Catalog domain router.

Reads are public. Writes require an active admin.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.auth.dependencies import require_admin
from app.catalog import service
from app.catalog.models import ProductCategory
from app.catalog.schemas import (
    CatalogStats,
    ProductCreate,
    ProductListParams,
    ProductPage,
    ProductRead,
    ProductUpdate,
)
from app.core.constants import CommonResponses, Routes
from app.core.deps import SessionDep

router = APIRouter(
    prefix=Routes.CATALOG.prefix,
    tags=[Routes.CATALOG.tag],
    responses={**CommonResponses.BAD_REQUEST},
)

ADMIN_DEPENDENCIES = [Depends(require_admin)]
ADMIN_RESPONSES = {**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN}

ListParamsQuery = Annotated[ProductListParams, Query()]


@router.get("", response_model=ProductPage)
async def list_products(session: SessionDep, params: ListParamsQuery):
    """List products with optional filters, sorting and pagination.

    sort_by accepts title, base_cost, created_at and updated_at; anything
    else sorts by creation time.
    """
    return service.list_products(session, params)


@router.get("/search/{query}", response_model=ProductPage)
async def search_products(query: str, session: SessionDep, params: ListParamsQuery):
    """Search titles and descriptions (case-insensitive)."""
    return service.search_products(session, query, params)


@router.get("/category/{category}", response_model=ProductPage)
async def list_by_category(
    category: ProductCategory, session: SessionDep, params: ListParamsQuery
):
    """List products in one category."""
    return service.list_by_category(session, category, params)


@router.get("/brand/{brand}", response_model=ProductPage)
async def list_by_brand(brand: str, session: SessionDep, params: ListParamsQuery):
    """List products of one brand."""
    return service.list_by_brand(session, brand, params)


@router.get("/stats/overview", response_model=CatalogStats)
async def catalog_stats(session: SessionDep):
    """Catalog statistics over products that are not deleted."""
    return service.get_catalog_stats(session)


@router.get(
    "/{product_id}",
    response_model=ProductRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_product(product_id: uuid.UUID, session: SessionDep):
    """Get one product with its print areas."""
    return ProductRead.model_validate(service.get_product(session, product_id))


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=ADMIN_DEPENDENCIES,
    responses={**ADMIN_RESPONSES, **CommonResponses.CONFLICT},
)
async def create_product(body: ProductCreate, session: SessionDep):
    """Create a product with at least one print area. Admin only."""
    return ProductRead.model_validate(service.create_product(session, body))


@router.patch(
    "/{product_id}",
    response_model=ProductRead,
    dependencies=ADMIN_DEPENDENCIES,
    responses={
        **ADMIN_RESPONSES,
        **CommonResponses.NOT_FOUND,
        **CommonResponses.CONFLICT,
    },
)
async def update_product(
    product_id: uuid.UUID, body: ProductUpdate, session: SessionDep
):
    """Partially update a product. Admin only.

    print_areas, when given, replaces every existing print area.
    """
    return ProductRead.model_validate(
        service.update_product(session, product_id, body)
    )


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=ADMIN_DEPENDENCIES,
    responses={**ADMIN_RESPONSES, **CommonResponses.NOT_FOUND},
)
async def delete_product(product_id: uuid.UUID, session: SessionDep):
    """Soft-delete a product. Admin only."""
    service.soft_delete_product(session, product_id)


@router.delete(
    "/{product_id}/hard",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=ADMIN_DEPENDENCIES,
    responses={**ADMIN_RESPONSES, **CommonResponses.NOT_FOUND},
)
async def hard_delete_product(product_id: uuid.UUID, session: SessionDep):
    """Permanently delete a product and its print areas. Admin only."""
    service.hard_delete_product(session, product_id)


@router.patch(
    "/{product_id}/restore",
    response_model=ProductRead,
    dependencies=ADMIN_DEPENDENCIES,
    responses={**ADMIN_RESPONSES, **CommonResponses.NOT_FOUND},
)
async def restore_product(product_id: uuid.UUID, session: SessionDep):
    """Restore a soft-deleted product. Admin only."""
    return ProductRead.model_validate(service.restore_product(session, product_id))
