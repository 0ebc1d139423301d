"""
Product Service - CRUD over the products collection.
"""
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection

from shared.exceptions import ProductNotFoundError, ValidationError
from shared.persistance.mongo_db import mongo_pool
from shared.models.products_model import (
    ProductCreate,
    ProductsModel,
    ProductUpdate,
)
from shared.models.users_model import utc_now
from shared.services.logger import get_logger
from config.settings import settings


logger = get_logger(__name__)


def parse_object_id(product_id: str) -> ObjectId:
    """Parse a path id, raising ValidationError for malformed ids."""
    try:
        return ObjectId(product_id)
    except (InvalidId, TypeError):
        raise ValidationError("Invalid ID")


class ProductService:
    """Single-document operations on vehicle listings."""

    def __init__(self, collection: Optional[Collection] = None):
        self._collection = collection

    @property
    def collection(self) -> Collection:
        """Get products collection (lazy-loaded from pool if not injected)."""
        if self._collection is None:
            self._collection = mongo_pool.get_collection(
                settings.PRODUCTS_COLLECTION,
                settings.MONGO_DB,
            )
        return self._collection

    def list_products(self) -> list[ProductsModel]:
        """All products in store order."""
        return [ProductsModel.from_document(doc) for doc in self.collection.find()]

    def get_product(self, product_id: str) -> ProductsModel:
        doc = self.collection.find_one({"_id": parse_object_id(product_id)})
        if not doc:
            raise ProductNotFoundError(product_id)
        return ProductsModel.from_document(doc)

    def create_product(self, data: ProductCreate) -> str:
        """
        Insert a product.

        title, brand and price are required; a non-http image is
        stored as null.

        Returns:
            The new product id
        """
        if not data.title or not data.brand or not data.price:
            raise ValidationError("Fill required fields")

        doc = data.to_document()
        doc["createdAt"] = utc_now()

        result = self.collection.insert_one(doc)
        logger.info(f"Product created: {result.inserted_id}")
        return str(result.inserted_id)

    def update_product(self, product_id: str, data: ProductUpdate) -> None:
        """Set the fields the client sent; the rest are left as stored."""
        oid = parse_object_id(product_id)
        fields = data.to_set_fields()
        if not fields:
            raise ValidationError("No fields to update")

        result = self.collection.update_one({"_id": oid}, {"$set": fields})
        if result.matched_count == 0:
            raise ProductNotFoundError(product_id)
        logger.info(f"Product updated: {product_id} ({', '.join(sorted(fields))})")

    def delete_product(self, product_id: str) -> None:
        result = self.collection.delete_one({"_id": parse_object_id(product_id)})
        if result.deleted_count == 0:
            raise ProductNotFoundError(product_id)
        logger.info(f"Product deleted: {product_id}")
