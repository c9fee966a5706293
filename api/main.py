"""
Sample Data Gateway - Main entry point
"""
import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from lib.db import Database
from lib.logging import configure_logging
from lib.query import QueryRunner
from lib.say_client import SayClient
from lib.settings import settings
from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import install_logging
from api.routes.health import router as health_router
from api.routes.customers import router as customers_router
from api.routes.agents import router as agents_router
from api.routes.students import router as students_router
from api.routes.foods import router as foods_router
from api.routes.say import router as say_router

logger = logging.getLogger(__name__)


def create_app(
    database: Optional[Database] = None,
    say_client: Optional[SayClient] = None
) -> FastAPI:
    """Build the app; the pool and upstream client are created here, never at import"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage app lifecycle - connect/disconnect resources"""
        configure_logging(settings.log_level)
        logger.info(f"Starting {settings.app_name}...")

        db = database or Database.from_settings(settings)
        await db.connect()
        client = say_client or SayClient(
            settings.say_function_url,
            timeout=settings.say_timeout_seconds
        )
        await client.start()

        # Store in app state
        app.state.settings = settings
        app.state.database = db
        app.state.runner = QueryRunner(db)
        app.state.say_client = client

        logger.info(f"{settings.app_name} ready on port {settings.api_port} ({settings.environment})")
        yield
        # Shutdown
        await client.close()
        await db.disconnect()
        logger.info("Disconnected from database and upstream")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="REST-like API over the sample database",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )
    install_logging(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(say_router)
    app.include_router(customers_router)
    app.include_router(agents_router)
    app.include_router(students_router)
    app.include_router(foods_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
