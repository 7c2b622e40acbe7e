"""Customer Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers render failures in the OperationResult shape
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan (SQL backend only)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_tables_on_startup for local runs; deployed databases use Alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from customer_registry.api.error_handlers import register_error_handlers
from customer_registry.api.routes import customers, health
from customer_registry.config import get_settings
from customer_registry.infrastructure.database import init_db
from customer_registry.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = None
    if settings.storage_backend == "sql":
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.create_tables_on_startup:
            await manager.create_all()
    logger.info(f"Customer Registry API started (storage={settings.storage_backend})")
    yield
    if manager is not None:
        await manager.dispose()
    logger.info("Customer Registry API shutting down")


app = FastAPI(
    title="Customer Registry API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(customers.router)

register_error_handlers(app)
