from app.routers.cars import router as cars_router
from app.routers.dashboard import router as dashboard_router
from app.routers.health import router as health_router
from app.routers.sales import router as sales_router

__all__ = [
    "cars_router",
    "dashboard_router",
    "health_router",
    "sales_router",
]
