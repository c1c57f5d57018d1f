from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request):
    settings = request.app.state.settings
    connector = request.app.state.connector
    database_ok = connector.ping()
    return {
        "status": "ok" if database_ok else "degraded",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "database": "ok" if database_ok else "unavailable",
        "time": datetime.now(timezone.utc).isoformat(),
    }
