"""Protobuf messages for ``product.ProductService``.

The message classes are built at import time from a
``FileDescriptorProto`` equivalent to ``protos/product.proto`` and
registered in a private descriptor pool, so no ``protoc`` step is
needed to run the server or its clients.
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "product"
SERVICE_NAME = f"{PACKAGE}.ProductService"

_Field = descriptor_pb2.FieldDescriptorProto

_STRING = _Field.TYPE_STRING
_INT64 = _Field.TYPE_INT64
_UINT64 = _Field.TYPE_UINT64
_UINT32 = _Field.TYPE_UINT32
_DOUBLE = _Field.TYPE_DOUBLE
_MESSAGE = _Field.TYPE_MESSAGE

# message name -> (field name, number, type, message type name, modifier)
_MESSAGE_FIELDS = {
    "Filter": (
        ("page", 1, _INT64, None, None),
        ("limit", 2, _INT64, None, None),
        ("name", 3, _STRING, None, None),
    ),
    "Pagination": (
        ("total_count", 1, _UINT64, None, None),
        ("limit", 2, _UINT64, None, None),
        ("page", 3, _UINT64, None, None),
    ),
    "Product": (
        ("id", 1, _STRING, None, None),
        ("name", 2, _STRING, None, None),
        ("stock", 3, _UINT32, None, None),
        ("price", 4, _DOUBLE, None, None),
    ),
    "Products": (
        ("pagination", 1, _MESSAGE, "Pagination", None),
        ("data", 2, _MESSAGE, "Product", "repeated"),
    ),
    "Id": (("id", 1, _STRING, None, None),),
    "Status": (("status", 1, _STRING, None, None),),
    "UpdateDataProduct": (
        ("id", 1, _STRING, None, None),
        ("name", 2, _STRING, None, "optional"),
        ("stock", 3, _UINT32, None, "optional"),
        ("price", 4, _DOUBLE, None, "optional"),
    ),
}

# (rpc name, request message, response message)
METHODS = (
    ("ListProducts", "Filter", "Products"),
    ("GetProduct", "Id", "Product"),
    ("CreateProduct", "Product", "Id"),
    ("UpdateProduct", "UpdateDataProduct", "Status"),
    ("DeleteProduct", "Id", "Status"),
)


def _add_message(file_proto, name, fields):
    message = file_proto.message_type.add(name=name)
    for field_name, number, field_type, type_name, modifier in fields:
        field = message.field.add(
            name=field_name,
            number=number,
            type=field_type,
            label=(
                _Field.LABEL_REPEATED
                if modifier == "repeated"
                else _Field.LABEL_OPTIONAL
            ),
        )
        if type_name is not None:
            field.type_name = f".{PACKAGE}.{type_name}"
        if modifier == "optional":
            # proto3 ``optional``: a synthetic oneof gives the field presence
            field.proto3_optional = True
            field.oneof_index = len(message.oneof_decl)
            message.oneof_decl.add(name=f"_{field_name}")


def build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    """Return the descriptor of ``product.proto``."""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="product.proto", package=PACKAGE, syntax="proto3"
    )
    for name, fields in _MESSAGE_FIELDS.items():
        _add_message(file_proto, name, fields)

    service = file_proto.service.add(name="ProductService")
    for method_name, input_type, output_type in METHODS:
        service.method.add(
            name=method_name,
            input_type=f".{PACKAGE}.{input_type}",
            output_type=f".{PACKAGE}.{output_type}",
        )
    return file_proto


pool = descriptor_pool.DescriptorPool()
pool.AddSerializedFile(build_file_descriptor().SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(
        pool.FindMessageTypeByName(f"{PACKAGE}.{name}")
    )


Filter = _message_class("Filter")
Pagination = _message_class("Pagination")
Product = _message_class("Product")
Products = _message_class("Products")
Id = _message_class("Id")
Status = _message_class("Status")
UpdateDataProduct = _message_class("UpdateDataProduct")

MESSAGES = {name: _message_class(name) for name in _MESSAGE_FIELDS}
