"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the gRPC layer (Servicers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``ProductFilterDTO``: list-query parameters (page, limit, name).
- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``ProductOutputDTO``: a stored product as returned to callers.
- ``PaginationDTO`` / ``ProductPageDTO``: one page of a list query.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.products.constants import MAX_STOCK, UPDATABLE_FIELDS

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class ProductFilterDTO(BaseModel):
    """Immutable list-query parameters.

    Zero ``page`` or ``limit`` means "use the default"; the service
    resolves them.  Neither value is ever persisted.
    """

    model_config = ConfigDict(frozen=True)

    page: int = 0
    limit: int = 0
    name: str = ""


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``id`` is optional: an empty string asks the service to generate one.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""
    stock: int = 0
    price: float = 0.0


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only supplied fields will be updated.
    ``None`` means "not supplied"; ``stock=0`` is a real update.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    stock: Optional[int] = None
    price: Optional[float] = None

    def changes(self) -> Dict[str, Any]:
        """Return the supplied fields as a ``$set`` document."""
        return {
            field: getattr(self, field)
            for field in UPDATABLE_FIELDS
            if getattr(self, field) is not None
        }


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product responses.

    ``stock`` is bounded to the uint32 range of ``Product.stock`` so a
    stored value that cannot be encoded fails validation here.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    stock: int = Field(default=0, ge=0, le=MAX_STOCK)
    price: float = 0.0

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> ProductOutputDTO:
        """Build an output DTO from a stored MongoDB document.

        Missing fields decode to their zero value.
        """
        return cls(
            id=str(document["_id"]),
            name=document.get("name", ""),
            stock=document.get("stock", 0),
            price=document.get("price", 0.0),
        )


class PaginationDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_count: int
    limit: int
    page: int


class ProductPageDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    pagination: PaginationDTO
    items: List[ProductOutputDTO]
