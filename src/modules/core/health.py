import time
from typing import Any, Dict, Iterable

import structlog
from grpc_health.v1 import health, health_pb2
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

logger = structlog.get_logger()


def check_database(collection: Collection) -> Dict[str, Any]:
    try:
        start = time.monotonic()
        collection.database.command("ping")
        return {
            "status": "up",
            "response_time_ms": round((time.monotonic() - start) * 1000, 2),
        }
    except PyMongoError:
        logger.error("health_check_db_failure")
        return {"status": "down"}


class DatabaseHealthServicer(health.HealthServicer):
    """``grpc.health.v1`` servicer that pings MongoDB on every ``Check``.

    The overall status ("") and each name in ``services`` are SERVING
    while the ping succeeds and NOT_SERVING otherwise.
    """

    def __init__(self, collection: Collection, services: Iterable[str] = ()) -> None:
        super().__init__()
        self._collection = collection
        self._services = ("", *services)
        self.refresh()

    def refresh(self) -> bool:
        database = check_database(self._collection)
        serving = database["status"] == "up"
        status = (
            health_pb2.HealthCheckResponse.SERVING
            if serving
            else health_pb2.HealthCheckResponse.NOT_SERVING
        )
        for service in self._services:
            self.set(service, status)

        logger.info(
            "health_check_completed",
            status="healthy" if serving else "unhealthy",
            database=database,
        )
        return serving

    def Check(self, request, context):
        self.refresh()
        return super().Check(request, context)


def build_health_servicer(
    collection: Collection, services: Iterable[str] = ()
) -> DatabaseHealthServicer:
    return DatabaseHealthServicer(collection, services)
