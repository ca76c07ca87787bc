"""Product gRPC servicer.

Exposes the ``ProductService`` over gRPC.  Domain exceptions are
caught and translated into status codes. The servicer never
swallows generic exceptions.
"""

from __future__ import annotations

import functools

import grpc

from modules.products import proto
from modules.products.constants import PRODUCT_DELETED, PRODUCT_UPDATED
from modules.products.dtos import (
    CreateProductDTO,
    ProductFilterDTO,
    ProductOutputDTO,
    UpdateProductDTO,
)
from modules.products.exceptions import (
    EmptyProductUpdate,
    InvalidProductId,
    ProductError,
    ProductNotFound,
    ProductStorageError,
)
from modules.products.services import ProductService

STATUS_CODES = {
    InvalidProductId: grpc.StatusCode.INVALID_ARGUMENT,
    EmptyProductUpdate: grpc.StatusCode.INVALID_ARGUMENT,
    ProductNotFound: grpc.StatusCode.NOT_FOUND,
    ProductStorageError: grpc.StatusCode.INTERNAL,
}


def status_code_for(exc: ProductError) -> grpc.StatusCode:
    for exc_type, code in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return grpc.StatusCode.INTERNAL


def _aborts_on_domain_errors(method):
    @functools.wraps(method)
    def wrapper(self, request, context):
        try:
            return method(self, request, context)
        except ProductError as exc:
            context.abort(status_code_for(exc), str(exc))

    return wrapper


def _to_message(product: ProductOutputDTO):
    return proto.Product(
        id=product.id,
        name=product.name,
        stock=product.stock,
        price=product.price,
    )


def _optional(request, field: str):
    return getattr(request, field) if request.HasField(field) else None


class ProductServicer:
    """Implements ``product.ProductService`` on top of ``ProductService``."""

    def __init__(self, service: ProductService) -> None:
        self._service = service

    @_aborts_on_domain_errors
    def ListProducts(self, request, context):
        filters = ProductFilterDTO(
            page=request.page, limit=request.limit, name=request.name
        )
        page = self._service.list_products(filters)
        return proto.Products(
            pagination=proto.Pagination(
                total_count=page.pagination.total_count,
                limit=page.pagination.limit,
                page=page.pagination.page,
            ),
            data=[_to_message(product) for product in page.items],
        )

    @_aborts_on_domain_errors
    def GetProduct(self, request, context):
        return _to_message(self._service.get_product(request.id))

    @_aborts_on_domain_errors
    def CreateProduct(self, request, context):
        dto = CreateProductDTO(
            id=request.id,
            name=request.name,
            stock=request.stock,
            price=request.price,
        )
        return proto.Id(id=self._service.create_product(dto))

    @_aborts_on_domain_errors
    def UpdateProduct(self, request, context):
        dto = UpdateProductDTO(
            name=_optional(request, "name"),
            stock=_optional(request, "stock"),
            price=_optional(request, "price"),
        )
        self._service.update_product(request.id, dto)
        return proto.Status(status=PRODUCT_UPDATED)

    @_aborts_on_domain_errors
    def DeleteProduct(self, request, context):
        self._service.delete_product(request.id)
        return proto.Status(status=PRODUCT_DELETED)


def add_product_servicer_to_server(servicer: ProductServicer, server: grpc.Server) -> None:
    """Register ``servicer`` under ``product.ProductService``."""
    handlers = {
        method_name: grpc.unary_unary_rpc_method_handler(
            getattr(servicer, method_name),
            request_deserializer=proto.MESSAGES[input_type].FromString,
            response_serializer=proto.MESSAGES[output_type].SerializeToString,
        )
        for method_name, input_type, output_type in proto.METHODS
    }
    server.add_generic_rpc_handlers(
        (grpc.method_handlers_generic_handler(proto.SERVICE_NAME, handlers),)
    )
