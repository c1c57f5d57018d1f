from fastapi import status


class CatalogError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid product data"


class Unauthorized(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFound(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Product not found"


class DuplicateSlug(CatalogError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Product with this slug already exists"


class StoreUnavailable(CatalogError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Product store is unavailable"


__all__ = [
    "CatalogError",
    "DuplicateSlug",
    "NotFound",
    "StoreUnavailable",
    "Unauthorized",
    "ValidationError",
]
