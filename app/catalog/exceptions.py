"""Catalog domain exceptions."""

from app.core.exceptions import ConflictError, NotFoundError


class ProductNotFoundError(NotFoundError):
    """Raised when a product does not exist or is soft-deleted."""

    error_type = "product_not_found"

    def __init__(self, message: str = "Product not found"):
        super().__init__(message)


class ProductExistsError(ConflictError):
    """Raised when another product already has the same title and brand."""

    error_type = "product_exists"

    def __init__(self, message: str = "Product already exists for this brand"):
        super().__init__(message)
