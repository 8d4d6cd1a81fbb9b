from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pod_job_tracker.app import App
from pod_job_tracker.config import Config
from pod_job_tracker.errors import CounterError, UserError
from pod_job_tracker.web.error_handlers import counter_error_handler, general_exception_handler, user_error_handler
from pod_job_tracker.web.routers import counter_router, system_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="Pod Job Tracker", lifespan=lifespan)

    app.include_router(system_router)
    app.include_router(counter_router)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(CounterError, counter_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app
