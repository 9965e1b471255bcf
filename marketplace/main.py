# marketplace/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from marketplace.api.errors import setup_exception_handlers
from marketplace.api.routers import auth, carts, health, items, notifications, orders, users
from marketplace.data.database import Database
from marketplace.services.session_service import SessionService
from marketplace.utils.settings import API_PREFIX
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(
    database: Database | None = None,
    session_service: SessionService | None = None,
) -> FastAPI:
    owns_database = database is None
    database = database or Database()
    session_service = session_service or SessionService()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Initializing database...")
        try:
            database.create_all()
        except Exception as e:
            logger.error(f"Failed to create tables: {e}")
            raise
        yield
        if owns_database:
            database.dispose()

    app = FastAPI(
        title="Campus Marketplace",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.db = database
    app.state.sessions = session_service

    setup_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router, prefix=API_PREFIX)
    app.include_router(users.router, prefix=API_PREFIX)
    app.include_router(items.router, prefix=API_PREFIX)
    app.include_router(carts.router, prefix=API_PREFIX)
    app.include_router(orders.router, prefix=API_PREFIX)
    app.include_router(notifications.router, prefix=API_PREFIX)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
