"""
Handles application configuration for the pump decoder daemon.

This module is responsible for:
- Configuring logging for the application.
- Determining the settings layout file to load, considering an environment
  override and the layout bundled with pump_decoder.
- Providing the optional pump model used to seed the session store.
- Providing FastAPI application settings (title, description, root_path).
"""

import logging
import os

import coloredlogs

from pump_decoder.device_type import PumpDeviceType

module_logger = logging.getLogger(__name__)

# Resolved by get_actual_layout_path()
ACTUAL_LAYOUT_PATH: str | None = None


def configure_logger():
    root_logger = logging.getLogger()
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()

    log_level_int = getattr(logging, log_level_str, None)
    if not isinstance(log_level_int, int):
        module_logger.warning(f"Invalid LOG_LEVEL '{log_level_str}'. Defaulting to INFO.")
        log_level_int = logging.INFO

    log_format = "%(asctime)s %(name)s[%(process)d] %(levelname)s %(message)s"

    # Handlers filter by their own level; the root logger passes everything.
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    coloredlogs.install(
        level=log_level_int,
        fmt=log_format,
        logger=root_logger,
        reconfigure=True,
    )

    return root_logger


# ── Settings layout path ───────────────────────────────────────────────────
def get_actual_layout_path():
    """
    Determines the settings layout file the decoder will load.

    PUMP_SETTINGS_LAYOUT_PATH overrides the bundled layout if it exists and is
    readable; otherwise the bundled layout is used and a warning is logged.
    The result is cached in ACTUAL_LAYOUT_PATH.

    Returns:
        str: Path to the settings layout YAML file.
    """
    global ACTUAL_LAYOUT_PATH

    if ACTUAL_LAYOUT_PATH is not None:
        return ACTUAL_LAYOUT_PATH

    from pump_decoder.settings import _default_layout_path

    default_layout_path = _default_layout_path()
    layout_override_env = os.getenv("PUMP_SETTINGS_LAYOUT_PATH")

    actual_layout_path = default_layout_path
    if layout_override_env:
        if os.path.exists(layout_override_env) and os.access(layout_override_env, os.R_OK):
            actual_layout_path = layout_override_env
        else:
            module_logger.warning(
                f"Override settings layout path '{layout_override_env}' is missing or "
                f"unreadable. Using bundled default: '{default_layout_path}'"
            )

    ACTUAL_LAYOUT_PATH = actual_layout_path
    module_logger.info(f"Settings layout in use: {ACTUAL_LAYOUT_PATH}")
    return ACTUAL_LAYOUT_PATH


# ── Pump model seed ────────────────────────────────────────────────────────
def get_initial_pump_model():
    """
    Returns the pump model named by PUMP_MODEL (e.g. '523'), or Unknown_Device.

    An unrecognized code is logged and ignored.
    """
    model_code = os.getenv("PUMP_MODEL")
    if not model_code:
        return PumpDeviceType.Unknown_Device

    device_type = PumpDeviceType.get_by_model_code(model_code)
    if device_type is PumpDeviceType.Unknown_Device:
        module_logger.warning(f"Unrecognized PUMP_MODEL '{model_code}'. Starting as unknown.")
    return device_type


# ── FastAPI Configuration ──────────────────────────────────────────────────
def get_fastapi_config():
    """
    Retrieves FastAPI application settings from environment variables.

    Returns:
        dict: A dictionary containing title, server_description, and root_path
              for the FastAPI application.
    """
    return {
        "title": os.getenv("PUMP_DAEMON_TITLE", "pump-daemon"),
        "server_description": os.getenv(
            "PUMP_DAEMON_SERVER_DESCRIPTION", "Insulin pump response decoder"
        ),
        "root_path": os.getenv("PUMP_DAEMON_ROOT_PATH", ""),
    }
