"""gRPC server bootstrap.

``create_server`` wires the interceptors and servicers; ``main`` is the
``product-grpc-server`` console entry point.
"""

from __future__ import annotations

import signal
from concurrent import futures
from typing import Optional, Tuple

import grpc
import structlog
from grpc_health.v1 import health, health_pb2_grpc

from config import settings
from config.database import get_collection
from modules.core.health import build_health_servicer
from modules.core.interceptors import CorrelationIdInterceptor
from modules.products.proto import SERVICE_NAME
from modules.products.repositories.mongo_repository import ProductMongoRepository
from modules.products.servicers import ProductServicer, add_product_servicer_to_server
from modules.products.services import ProductService

logger = structlog.get_logger(__name__)


def create_server(
    service: ProductService,
    health_servicer: Optional[health.HealthServicer] = None,
    address: str = settings.GRPC_ADDRESS,
    max_workers: int = settings.GRPC_MAX_WORKERS,
) -> Tuple[grpc.Server, int]:
    """Build an unstarted server bound to ``address``.

    Returns the server and the bound port (useful with ``localhost:0``).
    """
    server = grpc.server(
        futures.ThreadPoolExecutor(max_workers=max_workers),
        interceptors=(CorrelationIdInterceptor(),),
    )
    add_product_servicer_to_server(ProductServicer(service), server)
    if health_servicer is not None:
        health_pb2_grpc.add_HealthServicer_to_server(health_servicer, server)

    port = server.add_insecure_port(address)
    return server, port


def serve() -> None:
    collection = get_collection()
    service = ProductService(
        repository=ProductMongoRepository(collection),
        default_page_size=settings.DEFAULT_PAGE_SIZE,
        legacy_create=settings.PRODUCT_LEGACY_CREATE,
    )
    health_servicer = build_health_servicer(collection, services=(SERVICE_NAME,))
    server, port = create_server(service, health_servicer)

    def _shutdown(signum, _frame):
        logger.info("server.stopping", signal=signal.Signals(signum).name)
        health_servicer.enter_graceful_shutdown()
        server.stop(settings.GRPC_SHUTDOWN_GRACE)

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    server.start()
    logger.info(
        "server.started",
        address=settings.GRPC_ADDRESS,
        port=port,
        database=settings.MONGO_DATABASE,
        collection=settings.MONGO_COLLECTION,
    )
    server.wait_for_termination()
    logger.info("server.stopped")


def main() -> None:
    settings.configure_logging()
    serve()


if __name__ == "__main__":
    main()
