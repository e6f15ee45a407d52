"""
Weekplan - Main Application Entry Point

Weekly task scheduler: allocates must/want tasks over the business week.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weekplan.core.config import get_settings
from weekplan.core.logger import setup_logger
from weekplan.infrastructure.local.database import create_database

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler: owns the database handle."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Weekplan in {settings.ENVIRONMENT} mode...")

    database = create_database(settings)
    await database.init()
    app.state.database = database

    yield

    # Shutdown
    logger.info("Shutting down Weekplan...")
    app.state.database = None
    await database.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Weekplan",
        description="Weekly task scheduler for the Monday-Friday business week",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from weekplan.api import schedule

    app.include_router(schedule.router, prefix="/api/schedule", tags=["schedule"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
