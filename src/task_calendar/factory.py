"""Dependency injection factory."""

import datetime as dt
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from task_calendar.calendar.day_cell import DayCell
from task_calendar.calendar.week import build_week
from task_calendar.client.task_store import TaskStoreClient
from task_calendar.config import Config
from task_calendar.controller.task_list import TaskListController
from task_calendar.storage.task_repository import TaskRepository

logger = logging.getLogger(__name__)

# Global config instance for dependency injection
_config: Config | None = None

# Global repository for the reference API
_repository: TaskRepository | None = None


def get_config() -> Config:
    """Get or create Config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_repository() -> TaskRepository:
    """Get or create TaskRepository singleton."""
    global _repository
    if _repository is None:
        _repository = TaskRepository(get_config().data_file)
    return _repository


def create_task_store(config: Config | None = None) -> TaskStoreClient:
    """Create an HTTP task store client for the configured API."""
    config = config or get_config()
    return TaskStoreClient(config.api_base_url, timeout=config.request_timeout)


def create_controller(config: Config | None = None) -> TaskListController:
    """Create a task list controller wired to the configured API."""
    return TaskListController(create_task_store(config))


def create_week(
    controller: TaskListController,
    anchor: dt.date,
    today: dt.date | None = None,
    config: Config | None = None,
) -> list[DayCell]:
    """Build the day cells of the week containing anchor, using the configured week start."""
    config = config or get_config()
    return build_week(controller, anchor, today=today, week_start=config.week_start)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle - load stored tasks on startup."""
    logger.info("[Lifespan] Loading tasks...")
    get_repository().load()
    yield
    logger.info("[Lifespan] Shutting down")


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"[API] Invalid request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app() -> FastAPI:
    """Create FastAPI application (composition root)."""
    from task_calendar.api.tasks import router as tasks_router

    app = FastAPI(
        title="TaskCalendar",
        description="Reference task API for the task calendar client",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    # Mount API routes
    app.include_router(tasks_router, prefix="/api")

    return app
