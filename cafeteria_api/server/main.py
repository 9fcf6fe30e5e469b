"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
rate limiting, request tracing), registers exception handlers, and includes
all API routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from cafeteria_api.core.database import init_db
from cafeteria_api.core.logging_config import get_logger, setup_logging
from cafeteria_api.core.monitoring import initialize_logfire

from .api.v1 import (
    carts,
    categories,
    health,
    order_statuses,
    orders,
    payment_methods,
    products,
    reviews,
    roles,
    sellers,
    tables,
    users,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestTracingMiddleware
from .rate_limit import limiter

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    try:
        logger.info("Starting up Cafeteria API Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down Cafeteria API Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Cafeteria API

    Backend for a cafeteria ordering platform: catalog, carts, checkout,
    point-of-sale orders with dining tables, reviews, addresses and role-based access.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

app.state.limiter = limiter
setup_exception_handlers(app)

app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestTracingMiddleware)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)


app.include_router(health.router, prefix=constant.API_V1_STR, tags=["health"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(roles.router, prefix=f"{constant.API_V1_STR}/roles")
app.include_router(sellers.router, prefix=f"{constant.API_V1_STR}/sellers")
app.include_router(categories.router, prefix=f"{constant.API_V1_STR}/categories")
app.include_router(products.router, prefix=f"{constant.API_V1_STR}/products")
app.include_router(reviews.router, prefix=constant.API_V1_STR)
app.include_router(carts.router, prefix=f"{constant.API_V1_STR}/carts")
app.include_router(orders.router, prefix=f"{constant.API_V1_STR}/orders")
app.include_router(payment_methods.router, prefix=f"{constant.API_V1_STR}/payment-methods")
app.include_router(order_statuses.router, prefix=f"{constant.API_V1_STR}/order-statuses")
app.include_router(tables.router, prefix=f"{constant.API_V1_STR}/tables")


def run() -> None:
    """Run the API with uvicorn using the configured host and port."""
    uvicorn.run(
        "cafeteria_api.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
