"""
weekplan - Main Application Entry Point

Weekly auto-planner: places tasks and habits around calendar events.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weekplan.core.config import get_settings
from weekplan.core.logger import setup_logger

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting weekplan in {settings.ENVIRONMENT} mode...")

    if settings.is_local:
        from weekplan.infrastructure.local.database import init_db

        await init_db()

    yield

    # Shutdown
    logger.info("Shutting down weekplan...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="weekplan",
        description="Weekly auto-planner for tasks, habits and calendar events",
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
    from weekplan.api import events, habits, profile, projects, schedule, tasks

    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
    app.include_router(habits.router, prefix="/api/habits", tags=["habits"])
    app.include_router(events.router, prefix="/api/events", tags=["events"])
    app.include_router(profile.router, prefix="/api/profile", tags=["profile"])
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
