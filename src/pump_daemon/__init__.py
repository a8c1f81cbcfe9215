"""
pump_daemon

FastAPI service exposing the pump response decoder over HTTP.

Modules:
    - app_state: Pump session state (model store and converter)
    - config: Logging and environment configuration
    - main: FastAPI application setup and server entry point
    - metrics: Prometheus metrics
    - middleware: HTTP metrics middleware
    - models: Pydantic models for API request/response validation
"""

from ._version import VERSION
from .app_state import initialize_app_from_config
from .config import configure_logger, get_actual_layout_path

__all__ = [
    "VERSION",
    "initialize_app_from_config",
    "configure_logger",
    "get_actual_layout_path",
]
