"""
Startup Normalizer - One-shot data fixes for the products collection.

Runs once from the application lifespan, after the store connection is
up. Not safe to run concurrently with itself.
"""
from typing import Optional

from pymongo.collection import Collection

from shared.persistance.mongo_db import mongo_pool
from shared.services.logger import get_logger
from config.settings import settings


logger = get_logger(__name__)


MALFORMED_IMAGE_HOST = "i.ibb.co.com"
IMAGE_HOST = "i.ibb.co"
MALFORMED_IMAGE_PATTERN = r"^https?://i\.ibb\.co\.com/"

BACKFILL_BUCKET_SIZE = 10
BACKFILL_CATEGORIES = ("Bike", "Car", "Bicycle")


class StartupNormalizer:
    """
    Repairs product records written before the current validation rules.

    - normalize_product_images: fix the image host, null dead placeholders
    - backfill_categories: positional one-time category fill (opt-in)
    """

    def __init__(
        self,
        collection: Optional[Collection] = None,
        placeholder_urls: Optional[list[str]] = None,
    ):
        self._collection = collection
        if placeholder_urls is None:
            placeholder_urls = settings.PLACEHOLDER_IMAGE_URLS
        self.placeholder_urls = list(placeholder_urls)

    @property
    def collection(self) -> Collection:
        """Get products collection (lazy-loaded from pool if not injected)."""
        if self._collection is None:
            self._collection = mongo_pool.get_collection(
                settings.PRODUCTS_COLLECTION,
                settings.MONGO_DB,
            )
        return self._collection

    def normalize_product_images(self) -> int:
        """
        Rewrite malformed image URLs.

        Placeholder URLs become null; ``i.ibb.co.com`` becomes ``i.ibb.co``
        with scheme and path kept. A second run modifies nothing, since
        fixed records match neither filter.

        Returns:
            Number of records modified
        """
        modified = 0

        if self.placeholder_urls:
            result = self.collection.update_many(
                {"image": {"$in": self.placeholder_urls}},
                {"$set": {"image": None}},
            )
            modified += result.modified_count

        result = self.collection.update_many(
            {"image": {"$regex": MALFORMED_IMAGE_PATTERN}},
            [
                {
                    "$set": {
                        "image": {
                            # First occurrence is the host, given the anchored filter
                            "$replaceOne": {
                                "input": "$image",
                                "find": f"://{MALFORMED_IMAGE_HOST}/",
                                "replacement": f"://{IMAGE_HOST}/",
                            }
                        }
                    }
                }
            ],
        )
        modified += result.modified_count

        logger.info(f"Product images normalized: {modified} records modified")
        return modified

    def backfill_categories(self) -> dict[str, int]:
        """
        Tag the first 30 products (by _id) as Bike, Car, Bicycle in
        buckets of 10.

        Positional, not content based: re-running after inserts or
        deletes can tag a different set of records. Records past the
        30th are left alone.

        Returns:
            Records matched per category
        """
        counts: dict[str, int] = {}

        for bucket, category in enumerate(BACKFILL_CATEGORIES):
            ids = [
                doc["_id"]
                for doc in self.collection.find({}, {"_id": 1})
                .sort("_id", 1)
                .skip(bucket * BACKFILL_BUCKET_SIZE)
                .limit(BACKFILL_BUCKET_SIZE)
            ]
            if not ids:
                counts[category] = 0
                continue

            result = self.collection.update_many(
                {"_id": {"$in": ids}},
                {"$set": {"category": category}},
            )
            counts[category] = result.matched_count

        logger.info(f"Categories backfilled: {counts}")
        return counts

    def run(self, backfill: bool = False) -> dict:
        """Run the startup fixes in order and return a summary."""
        summary: dict = {"images_modified": self.normalize_product_images()}
        if backfill:
            summary["categories"] = self.backfill_categories()
        return summary
