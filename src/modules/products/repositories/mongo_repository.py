"""MongoDB implementation of the Product repository.

Satisfies ``IProductRepository`` using a ``pymongo`` collection handle
injected at construction.  Error handling follows the Null Object
pattern for look-ups: ``get_by_id`` returns ``None`` for a missing
document and the Service Layer decides what that means.  Driver
failures are re-raised as ``ProductStorageError`` with the driver's
message.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import structlog
from bson import ObjectId
from bson.errors import BSONError
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from modules.products.exceptions import ProductStorageError
from modules.products.repositories.interfaces import (
    IProductRepository,
    ProductDocument,
)

logger = structlog.get_logger(__name__)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except (PyMongoError, BSONError, ValueError, OverflowError) as exc:
        logger.error("product.storage_error", operation=operation, error=str(exc))
        raise ProductStorageError(str(exc)) from exc


class ProductMongoRepository(IProductRepository):
    """Concrete Product repository backed by a MongoDB collection."""

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def get_by_id(self, id: ObjectId) -> Optional[ProductDocument]:
        """Retrieve a product document by ``_id``.

        Returns ``None`` when no document matches.
        """
        with _storage_errors("find_one"):
            return self._collection.find_one({"_id": id})

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        with _storage_errors("count_documents"):
            return self._collection.count_documents(filters or {})

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[ProductDocument]:
        """List product documents in storage-native order.

        No sort is applied; ``limit=0`` means no limit.  Examples of
        valid filters::

            {"name": {"$regex": ".*widget.*", "$options": "i"}}
        """
        with _storage_errors("find"):
            cursor = self._collection.find(filters or {}, skip=skip, limit=limit)
            try:
                return list(cursor)
            finally:
                cursor.close()

    def save(self, entity: ProductDocument) -> None:
        """Insert a new product document."""
        with _storage_errors("insert_one"):
            result = self._collection.insert_one(entity)
        logger.info("product.saved", document_id=str(result.inserted_id))

    def update_fields(self, id: ObjectId, changes: Dict[str, Any]) -> None:
        with _storage_errors("update_one"):
            result = self._collection.update_one({"_id": id}, {"$set": changes})
        logger.info(
            "product.fields_set",
            product_id=str(id),
            matched=result.matched_count,
            fields=sorted(changes),
        )

    def delete(self, id: ObjectId) -> bool:
        """Hard-delete a product by ``_id``.

        Returns ``True`` if a document was removed, ``False`` if none
        matched.
        """
        with _storage_errors("delete_one"):
            result = self._collection.delete_one({"_id": id})
        return result.deleted_count > 0
