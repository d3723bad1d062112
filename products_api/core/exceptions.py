"""
Domain exceptions for the products API.

The application's exception handlers are the only place these become HTTP
responses; services and validators raise them and never build responses.
"""
from typing import Optional, Dict, Any, List, Union


class ProductAPIError(Exception):
    """Base exception for all products API errors."""

    status_code: int = 500

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class InvalidProductError(ProductAPIError):
    """Raised when a request body fails the product payload checks.

    ``errors`` holds one ``{"field": ..., "message": ...}`` entry per problem.
    """

    status_code = 400

    def __init__(self, message: str = "Invalid input", errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []


class ProductNotFoundError(ProductAPIError):
    """Raised when no product exists for the requested id."""

    status_code = 404

    def __init__(self, product_id: Union[int, str]):
        super().__init__("Product not found", {"product_id": product_id})
        self.product_id = product_id


class ProductServiceError(ProductAPIError):
    """Raised when the persistence layer fails unexpectedly."""

    status_code = 500
