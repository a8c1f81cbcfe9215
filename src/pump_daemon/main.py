#!/usr/bin/env python3
"""
Main entry point for the pump decoder daemon.

This script initializes and runs the FastAPI application that exposes the pump
response decoder over HTTP.

Key responsibilities include:
- Configuring application-wide logging.
- Loading the settings layouts (bundled or overridden by PUMP_SETTINGS_LAYOUT_PATH).
- Initializing the pump session state (see app_state.py), optionally seeded
  with the model named by PUMP_MODEL.
- Creating the FastAPI application with metrics middleware and the API router.
- Providing a command-line entry point to start the Uvicorn server.
"""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import ResponseValidationError
from fastapi.responses import PlainTextResponse

from pump_daemon import app_state
from pump_daemon.api_routers import api_router_decode
from pump_daemon.config import (
    configure_logger,
    get_actual_layout_path,
    get_fastapi_config,
    get_initial_pump_model,
)
from pump_daemon.middleware import prometheus_http_middleware
from pump_decoder.settings import load_settings_layouts

logger = logging.getLogger(__name__)


def create_app():
    fastapi_config = get_fastapi_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # --- Startup ---
        layouts = load_settings_layouts(get_actual_layout_path())
        app_state.initialize_app_from_config(layouts, get_initial_pump_model())
        yield
        # --- Shutdown ---
        logger.info("pump-daemon shutting down...")

    app = FastAPI(
        title=fastapi_config["title"],
        servers=[{"url": "/", "description": fastapi_config["server_description"]}],
        root_path=fastapi_config["root_path"],
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def prometheus_middleware_handler(request, call_next):
        """Prometheus metrics middleware for HTTP requests."""
        return await prometheus_http_middleware(request, call_next)

    @app.exception_handler(ResponseValidationError)
    async def validation_exception_handler(request, exc):
        """Handles response validation errors with a plain text message."""
        return PlainTextResponse(f"Validation error: {exc}", status_code=500)

    app.include_router(api_router_decode, prefix="/api")

    return app


app = create_app()


# ── Entrypoint ─────────────────────────────────────────────────────────────
def main():
    """
    Runs the Uvicorn server for the pump decoder daemon.

    Host, port and log level come from PUMP_DAEMON_HOST, PUMP_DAEMON_PORT and
    PUMP_DAEMON_LOG_LEVEL.
    """
    configure_logger()
    host = os.getenv("PUMP_DAEMON_HOST", "127.0.0.1")
    port = int(os.getenv("PUMP_DAEMON_PORT", "8000"))
    log_level = os.getenv("PUMP_DAEMON_LOG_LEVEL", "info").lower()

    logger.info(f"Starting Uvicorn server on {host}:{port} with log level '{log_level}'")
    uvicorn.run(app, host=host, port=port, log_level=log_level)


if __name__ == "__main__":
    main()
