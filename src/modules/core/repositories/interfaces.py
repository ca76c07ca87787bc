"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on the MongoDB driver directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from bson import ObjectId

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the stored document managed by the
    repository (e.g. a product document).
    """

    @abstractmethod
    def get_by_id(self, id: ObjectId) -> Optional[T]:
        """Retrieve a document by its ``_id``."""

    @abstractmethod
    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count documents matching ``filters``."""

    @abstractmethod
    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[T]:
        """List documents matching ``filters`` in storage-native order."""

    @abstractmethod
    def save(self, entity: T) -> None:
        """Insert a new document."""

    @abstractmethod
    def delete(self, id: ObjectId) -> bool:
        """Remove at most one document by ``_id``."""
