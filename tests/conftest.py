import grpc
import mongomock
import pytest

# Importing settings configures structlog for every test.
from config import settings  # noqa: F401
from config.server import create_server
from modules.products.client import ProductServiceStub
from modules.products.repositories.mongo_repository import ProductMongoRepository
from modules.products.services import ProductService


@pytest.fixture()
def collection():
    """An empty in-memory products collection."""
    return mongomock.MongoClient().product_grpc.products


@pytest.fixture()
def repository(collection):
    return ProductMongoRepository(collection)


@pytest.fixture()
def product_service(repository):
    return ProductService(repository=repository)


@pytest.fixture()
def grpc_channel(product_service):
    """Channel to an in-process server on an ephemeral port."""
    server, port = create_server(
        product_service, address="localhost:0", max_workers=4
    )
    server.start()
    channel = grpc.insecure_channel(f"localhost:{port}")
    try:
        yield channel
    finally:
        channel.close()
        server.stop(None)


@pytest.fixture()
def stub(grpc_channel):
    return ProductServiceStub(grpc_channel)
