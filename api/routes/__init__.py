"""API route modules."""

from routes.auth_routes import router as auth_router
from routes.health_routes import router as health_router
from routes.items_routes import router as items_router
from routes.orders_routes import router as orders_router
from routes.users_routes import router as users_router

__all__ = [
    "auth_router",
    "health_router",
    "items_router",
    "orders_router",
    "users_router",
]
