# Import all models for easy access
from .product import Product, ProductBase

# Export all models
__all__ = [
    "Product", "ProductBase",
]
