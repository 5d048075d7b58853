"""FastAPI application: logging setup, Mongo lifespan and routers."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import database
from app.routers import auth, dashboard, durations, locations, projects, timelogs

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await database.connect()
    logger.info("Daily goal %.2fh, timezone %s", settings.daily_goal_hours, settings.timezone)
    yield
    await database.disconnect()


def create_app() -> FastAPI:
    """Build the API with every router mounted."""
    app = FastAPI(
        title="Time Log Service API",
        description="Time logs with archive history, projects, locations and an activity dashboard",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for module in (auth, projects, locations, timelogs, dashboard, durations):
        app.include_router(module.router)

    @app.get("/health")
    async def health():
        return {"status": "healthy", "database": settings.mongodb_db_name}

    return app


app = create_app()
