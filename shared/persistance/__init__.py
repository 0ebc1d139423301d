"""
Persistance package - Database connections and repositories.
"""
from shared.persistance.mongo_db import (
    mongo_pool,
    ensure_indexes,
    get_mongo_client,
    get_database,
)

__all__ = ["mongo_pool", "ensure_indexes", "get_mongo_client", "get_database"]
