"""API routers."""

from .admin import router as admin_router
from .auth import router as auth_router
from .health import router as health_router
from .listings import router as listings_router
from .properties import router as properties_router
from .reports import router as reports_router
from .trackers import router as trackers_router
from .users import router as users_router

__all__ = [
    "admin_router",
    "auth_router",
    "health_router",
    "listings_router",
    "properties_router",
    "reports_router",
    "trackers_router",
    "users_router",
]
