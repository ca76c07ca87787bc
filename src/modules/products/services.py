"""Product service layer (Use Cases).

Orchestrates the five product operations, delegating persistence to
the injected ``IProductRepository``.  Each call is one round trip to
the database (list: count then find) with no retries.

Rules enforced here:
- Identifiers must parse as BSON ObjectIds.
- ``page``/``limit`` of zero fall back to 1 and the default page size.
- An update must carry at least one field.
- Only ``get_product`` reports a missing product; update and delete of
  an unknown id are no-ops.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping

import structlog
from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError

from modules.products.constants import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    NO_FIELDS_TO_UPDATE,
    PRODUCT_NOT_FOUND,
)
from modules.products.dtos import PaginationDTO, ProductOutputDTO, ProductPageDTO
from modules.products.exceptions import (
    EmptyProductUpdate,
    ProductNotFound,
    ProductStorageError,
)
from modules.products.identifiers import object_id_to_string, parse_object_id

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        ProductFilterDTO,
        UpdateProductDTO,
    )
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def build_name_filter(name: str) -> Dict[str, Any]:
    """Return the MongoDB filter for a case-insensitive substring match.

    The trimmed name is used as a regular expression as-is.
    """
    if not name:
        return {}
    return {"name": {"$regex": ".*" + name.strip() + ".*", "$options": "i"}}


def resolve_pagination(
    page: int, limit: int, default_limit: int = DEFAULT_LIMIT
) -> tuple[int, int, int]:
    """Return ``(page, limit, skip)`` with zero values replaced by defaults."""
    page = page or DEFAULT_PAGE
    limit = limit or default_limit
    return page, limit, (page - 1) * limit


def _decode(document: Mapping[str, Any]) -> ProductOutputDTO:
    try:
        return ProductOutputDTO.from_document(document)
    except (PydanticValidationError, KeyError) as exc:
        raise ProductStorageError(str(exc)) from exc


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    ``legacy_create`` reproduces the previous server's create behaviour,
    where the returned id is not the stored ``_id``.
    """

    def __init__(
        self,
        repository: IProductRepository,
        default_page_size: int = DEFAULT_LIMIT,
        legacy_create: bool = False,
    ) -> None:
        self._repo = repository
        self._default_page_size = default_page_size
        self._legacy_create = legacy_create

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: ProductFilterDTO) -> ProductPageDTO:
        """Return one page of products plus the total match count.

        The count and the page use the same name filter, so
        ``total_count`` ignores pagination.

        Raises:
            ProductStorageError: if either query fails.
        """
        page, limit, skip = resolve_pagination(
            filters.page, filters.limit, self._default_page_size
        )
        query = build_name_filter(filters.name)

        total_count = self._repo.count(query)
        documents = self._repo.list(query, skip=skip, limit=limit)

        return ProductPageDTO(
            pagination=PaginationDTO(total_count=total_count, limit=limit, page=page),
            items=[_decode(document) for document in documents],
        )

    def get_product(self, id: str) -> ProductOutputDTO:
        """Retrieve a single product by ID.

        Raises:
            InvalidProductId: if ``id`` is not an ObjectId.
            ProductNotFound: if the product does not exist.
        """
        object_id = parse_object_id(id)
        document = self._repo.get_by_id(object_id)
        if document is None:
            logger.info("product.not_found", product_id=id)
            raise ProductNotFound(PRODUCT_NOT_FOUND)
        return _decode(document)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> str:
        """Insert a product and return its identifier.

        An empty ``dto.id`` gets a freshly generated ObjectId.

        Raises:
            InvalidProductId: if a supplied ``id`` is malformed.
            ProductStorageError: if the insert fails (e.g. duplicate key).
        """
        object_id = parse_object_id(dto.id) if dto.id else ObjectId()

        if self._legacy_create:
            document = {
                "id": dto.id,
                "name": dto.name,
                "stock": dto.stock,
                "price": dto.price,
            }
        else:
            document = {
                "_id": object_id,
                "name": dto.name,
                "stock": dto.stock,
                "price": dto.price,
            }

        self._repo.save(document)
        product_id = object_id_to_string(object_id)
        logger.info(
            "product.created",
            product_id=product_id,
            legacy_create=self._legacy_create,
        )
        return product_id

    def update_product(self, id: str, dto: UpdateProductDTO) -> None:
        """Set the supplied fields on the matching product.

        Raises:
            InvalidProductId: if ``id`` is not an ObjectId.
            EmptyProductUpdate: if no field was supplied.
        """
        object_id = parse_object_id(id)
        changes = dto.changes()
        if not changes:
            raise EmptyProductUpdate(NO_FIELDS_TO_UPDATE)

        self._repo.update_fields(object_id, changes)
        logger.info("product.updated", product_id=id, fields=sorted(changes))

    def delete_product(self, id: str) -> None:
        """Delete at most one product; an unknown id is not an error.

        Raises:
            InvalidProductId: if ``id`` is not an ObjectId.
        """
        object_id = parse_object_id(id)
        deleted = self._repo.delete(object_id)
        logger.info("product.deleted", product_id=id, deleted=deleted)
