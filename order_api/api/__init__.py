# order_api/api/__init__.py
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from order_api.api.deps import enforce_rate_limit
from order_api.api.routers import auth, health, orders, users
from order_api.utils.settings import CORS_ORIGIN

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    app = FastAPI(
        title="Order Management API",
        version="1.0.0",
        description="REST API with authentication and role-based access control for order management",
        docs_url="/api-docs",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[CORS_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router)

    limited = [Depends(enforce_rate_limit)]
    app.include_router(auth.router, prefix=API_PREFIX, dependencies=limited)
    app.include_router(orders.router, prefix=API_PREFIX, dependencies=limited)
    app.include_router(users.router, prefix=API_PREFIX, dependencies=limited)

    return app
