import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.config import get_settings
from app.core.errors import DealershipError
from app.database.transaction import TransactionCoordinator
from app.dependencies import get_coordinator

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check():
    settings = get_settings()
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "time": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/db")
def database_health(coordinator: TransactionCoordinator = Depends(get_coordinator)):
    now = datetime.now(timezone.utc).isoformat()
    try:
        coordinator.run_transaction(lambda db: db.execute(text("SELECT 1")).scalar_one())
    except DealershipError as exc:
        logger.warning("Database health check failed: %s", exc.code)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "disconnected", "time": now},
        )
    return {"status": "ok", "database": "connected", "time": now}
