"""
Catalog Module - Vehicle listings (products).

Structure:
- services/: Product CRUD and startup data fixes
- http_handlers/: FastAPI routes (/products)
"""
from modules.catalog.services.product_service import ProductService
from modules.catalog.services.startup_normalizer import StartupNormalizer
from modules.catalog.http_handlers.products import router as products_router

__all__ = [
    "ProductService",
    "StartupNormalizer",
    "products_router",
]
