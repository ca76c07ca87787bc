"""Client stub for ``product.ProductService``."""

from __future__ import annotations

import grpc

from modules.products import proto


class ProductServiceStub:
    """One callable attribute per RPC, e.g. ``stub.GetProduct(proto.Id(id=...))``."""

    def __init__(self, channel: grpc.Channel) -> None:
        for method_name, input_type, output_type in proto.METHODS:
            setattr(
                self,
                method_name,
                channel.unary_unary(
                    f"/{proto.SERVICE_NAME}/{method_name}",
                    request_serializer=proto.MESSAGES[input_type].SerializeToString,
                    response_deserializer=proto.MESSAGES[output_type].FromString,
                ),
            )
