import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.core.errors import DealershipError, ValidationError
from app.core.logging import setup_logging
from app.database import Base, engine
from app.models import import_all_models
from app.routers import cars_router, dashboard_router, health_router, sales_router
from app.services.validation import validation_error_from_request

logger = logging.getLogger(__name__)

setup_logging()
settings: Settings = get_settings()

import_all_models()
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.APP_NAME)


@app.exception_handler(DealershipError)
def handle_dealership_error(request: Request, exc: DealershipError):
    content = {"error": exc.code, "detail": exc.message}
    if isinstance(exc, ValidationError):
        content["fields"] = exc.fields
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.code)
    return JSONResponse(status_code=exc.http_status, content=content)


@app.exception_handler(RequestValidationError)
def handle_request_validation_error(request: Request, exc: RequestValidationError):
    # Rendered like core validation failures; the rejected input is not echoed.
    return handle_dealership_error(request, validation_error_from_request(exc))


app.include_router(health_router)
app.include_router(cars_router)
app.include_router(sales_router)
app.include_router(dashboard_router)


@app.get("/")
def root():
    return {"app": settings.APP_NAME, "status": "running", "health": "/health"}


__all__ = ["app", "root"]
