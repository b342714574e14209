"""FastAPI application setup."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..app import Application
from .routes import (
    create_capture_router,
    create_control_router,
    create_observability_router,
)


def create_fastapi_app(
    application: Application | None = None,
    sim: Any = None,
) -> FastAPI:
    """Create and configure FastAPI application around one Application."""
    application = application or Application()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        """Manage application lifespan."""
        await application.start()
        if sim and hasattr(sim, "set_tracker"):
            sim.set_tracker(application.tracker)
        yield
        if sim:
            await sim.stop()
        await application.stop()

    fastapi_app = FastAPI(
        title="Stream Archive API",
        description="Capture, export and analysis of live message frames",
        version="0.1.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:5174"],  # Vite default
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(create_capture_router(application))
    fastapi_app.include_router(create_control_router(application, sim))
    fastapi_app.include_router(create_observability_router(application))

    return fastapi_app
