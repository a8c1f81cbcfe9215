"""
Manages the in-memory application state for the pump decoder daemon.

The daemon serves one pump session: a single PumpModelStore and the converter
built around it. Decoder calls are serialized with a lock because the store is
not safe for concurrent use and FastAPI runs sync endpoints in a thread pool.
"""

import logging
import threading
import time
from typing import Any, Mapping, Optional

from pump_daemon.metrics import (
    DECODE_ERRORS,
    DECODE_LATENCY,
    PUMP_MODEL_UPDATES,
    RESPONSES_DECODED,
    UNSUPPORTED_COMMANDS,
)
from pump_decoder import PumpCommandType, PumpDeviceType, PumpModelStore, PumpResponseConverter
from pump_decoder.exceptions import PumpDecodeError, UnsupportedCommandError
from pump_decoder.settings import SettingsLayout

logger = logging.getLogger(__name__)

model_store: PumpModelStore = PumpModelStore()
converter: Optional[PumpResponseConverter] = None

_session_lock = threading.Lock()


def initialize_app_from_config(
    settings_layouts: Optional[Mapping[str, SettingsLayout]] = None,
    initial_model: PumpDeviceType = PumpDeviceType.Unknown_Device,
) -> PumpResponseConverter:
    """
    Creates the session store and converter.

    Args:
        settings_layouts: Layouts returned by load_settings_layouts().
        initial_model: Pump model to seed the store with, if already known.
    """
    global model_store, converter

    model_store = PumpModelStore()
    if initial_model is not PumpDeviceType.Unknown_Device:
        model_store.set_pump_model(initial_model)
    converter = PumpResponseConverter(model_store=model_store, settings_layouts=settings_layouts)
    logger.info(f"Pump session initialized with model {model_store.get_pump_model().name}")
    return converter


def get_converter() -> PumpResponseConverter:
    global converter
    if converter is None:
        converter = PumpResponseConverter(model_store=model_store)
    return converter


def decode_response(command_type: PumpCommandType, payload: bytes) -> Any:
    """
    Decodes one response through the session converter, recording metrics.

    Raises:
        UnsupportedCommandError, PumpDecodeError: propagated from the decoder.
    """
    start = time.perf_counter()
    try:
        with _session_lock:
            result = get_converter().convert_response(command_type, payload)
    except UnsupportedCommandError:
        UNSUPPORTED_COMMANDS.inc()
        raise
    except PumpDecodeError:
        DECODE_ERRORS.inc()
        raise
    finally:
        DECODE_LATENCY.observe(time.perf_counter() - start)

    RESPONSES_DECODED.labels(command=command_type.name).inc()
    if command_type == PumpCommandType.PumpModel and result is not PumpDeviceType.Unknown_Device:
        PUMP_MODEL_UPDATES.inc()
    return result


def get_pump_model() -> PumpDeviceType:
    with _session_lock:
        return model_store.get_pump_model()


def set_pump_model(device_type: PumpDeviceType) -> bool:
    with _session_lock:
        updated = model_store.set_pump_model(device_type)
    if updated:
        PUMP_MODEL_UPDATES.inc()
    return updated
