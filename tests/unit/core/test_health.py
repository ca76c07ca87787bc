from unittest.mock import MagicMock

import pytest
from grpc_health.v1 import health_pb2
from pymongo.errors import ServerSelectionTimeoutError

from modules.core.health import build_health_servicer, check_database

pytestmark = pytest.mark.unit


@pytest.fixture()
def healthy_collection():
    collection = MagicMock()
    collection.database.command.return_value = {"ok": 1.0}
    return collection


@pytest.fixture()
def unreachable_collection():
    collection = MagicMock()
    collection.database.command.side_effect = ServerSelectionTimeoutError("no servers")
    return collection


def _status(servicer, service=""):
    response = servicer.Check(
        health_pb2.HealthCheckRequest(service=service), MagicMock()
    )
    return response.status


class TestCheckDatabase:
    def test_reports_up_with_response_time(self, healthy_collection):
        result = check_database(healthy_collection)
        assert result["status"] == "up"
        assert "response_time_ms" in result
        healthy_collection.database.command.assert_called_once_with("ping")

    def test_reports_down(self, unreachable_collection):
        assert check_database(unreachable_collection) == {"status": "down"}


class TestHealthServicer:
    def test_serving_when_database_is_up(self, healthy_collection):
        servicer = build_health_servicer(
            healthy_collection, services=("product.ProductService",)
        )
        assert _status(servicer) == health_pb2.HealthCheckResponse.SERVING
        assert (
            _status(servicer, "product.ProductService")
            == health_pb2.HealthCheckResponse.SERVING
        )

    def test_not_serving_when_database_is_down(self, unreachable_collection):
        servicer = build_health_servicer(
            unreachable_collection, services=("product.ProductService",)
        )
        assert _status(servicer) == health_pb2.HealthCheckResponse.NOT_SERVING

    def test_status_follows_the_database_after_start(self, healthy_collection):
        servicer = build_health_servicer(
            healthy_collection, services=("product.ProductService",)
        )
        healthy_collection.database.command.side_effect = ServerSelectionTimeoutError(
            "no servers"
        )

        assert _status(servicer) == health_pb2.HealthCheckResponse.NOT_SERVING
        assert (
            _status(servicer, "product.ProductService")
            == health_pb2.HealthCheckResponse.NOT_SERVING
        )

        healthy_collection.database.command.side_effect = None
        assert _status(servicer) == health_pb2.HealthCheckResponse.SERVING

    def test_recovers_when_database_comes_up(self, unreachable_collection):
        servicer = build_health_servicer(unreachable_collection)
        unreachable_collection.database.command.side_effect = None
        unreachable_collection.database.command.return_value = {"ok": 1.0}

        assert _status(servicer) == health_pb2.HealthCheckResponse.SERVING

    def test_graceful_shutdown_is_not_overridden(self, healthy_collection):
        servicer = build_health_servicer(healthy_collection)
        servicer.enter_graceful_shutdown()

        assert _status(servicer) == health_pb2.HealthCheckResponse.NOT_SERVING
