"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends, status
from starlette.responses import JSONResponse

from src.books_api.api.http.deps import get_database_service
from src.books_api.core.services.database.db_session import DbSessionService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: returns 200 OK as long as the process is running."""
    return {"status": "healthy", "service": "books-api"}


@router.get("/ready", response_model=None)
def readiness(
    database: DbSessionService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 when the database answers, 503 otherwise."""
    db_healthy = database.health_check()
    body = {
        "status": "ready" if db_healthy else "not_ready",
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": database.engine.dialect.name,
            }
        },
    }
    if not db_healthy:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body
