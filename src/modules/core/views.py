import time
from typing import Any, Dict

import structlog
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections
from django.db.migrations.executor import MigrationExecutor
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()


def _probe_database() -> Dict[str, Any]:
    """Round-trip to the store plus a pending-migrations check."""
    start = time.monotonic()
    connection = connections[DEFAULT_DB_ALIAS]
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    executor = MigrationExecutor(connection)
    pending = executor.migration_plan(executor.loader.graph.leaf_nodes())
    return {
        "status": "up",
        "vendor": connection.vendor,
        "pending_migrations": len(pending),
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """Public liveness probe; 503 when the store is unreachable."""
    try:
        database = _probe_database()
    except DatabaseError:
        logger.error("health_check_db_failure", exc_info=True)
        database = {"status": "down"}

    healthy = database["status"] == "up"
    logger.info("health_check_completed", status="healthy" if healthy else "unhealthy")

    return JsonResponse(
        {
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": {"database": database},
        },
        status=200 if healthy else 503,
    )
