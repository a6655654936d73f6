"""Offset pagination over SQLModel select statements."""

import math
from collections.abc import Sequence
from typing import Any, TypeVar

from sqlalchemy import func
from sqlmodel import Session, select
from sqlmodel.sql.expression import SelectOfScalar

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

T = TypeVar("T")


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for ``total`` rows at ``limit`` per page."""
    return math.ceil(total / limit)


def paginate(
    session: Session, statement: SelectOfScalar[T], page: int, limit: int
) -> tuple[Sequence[T], int]:
    """Run ``statement`` for one page and count all matching rows.

    ``page`` is 1-based. Pages past the end yield an empty list.

    Returns:
        Tuple of (items, total)
    """
    count_statement: Any = select(func.count()).select_from(
        statement.order_by(None).subquery()
    )
    total = session.exec(count_statement).one()
    items = session.exec(statement.offset((page - 1) * limit).limit(limit)).all()
    return items, total
