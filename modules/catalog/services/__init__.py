"""
Catalog Services Package.
"""
from modules.catalog.services.product_service import ProductService
from modules.catalog.services.startup_normalizer import StartupNormalizer

__all__ = ["ProductService", "StartupNormalizer"]
