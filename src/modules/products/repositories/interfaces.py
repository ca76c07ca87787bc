"""Product repository interface.

Extends ``IRepository`` with the partial update used by
``UpdateProduct``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Dict

from bson import ObjectId

from modules.core.repositories.interfaces import IRepository

ProductDocument = Dict[str, Any]


class IProductRepository(IRepository[ProductDocument]):
    """Repository contract for product documents.

    Implementations raise ``ProductStorageError`` for every backend
    failure and never retry.
    """

    @abstractmethod
    def update_fields(self, id: ObjectId, changes: Dict[str, Any]) -> None:
        """Apply ``changes`` with ``$set`` to at most one document.

        Matching nothing is not an error.
        """
