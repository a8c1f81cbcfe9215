"""
Defines the FastAPI APIRouter for pump response decoding.

This module includes routes to decode a raw pump response, to read and set the
session pump model, and to expose health and Prometheus metrics.
"""

import logging
from datetime import datetime
from typing import Any, Tuple

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel

from pump_daemon import app_state
from pump_daemon.models import DecodeRequest, DecodeResponse, PumpModelInfo, PumpModelUpdate
from pump_decoder import PumpCommandType, PumpDeviceType
from pump_decoder.basal import BasalProfile, TempBasalPair
from pump_decoder.exceptions import PumpDecodeError, UnsupportedCommandError

logger = logging.getLogger(__name__)

api_router_decode = APIRouter()  # FastAPI router for decoding and session endpoints


def serialize_result(result: Any) -> Tuple[str, Any]:
    """
    Converts a decoded value into (result_type, JSON-compatible value).
    """
    if result is None:
        return "none", None
    if isinstance(result, PumpDeviceType):
        return "pump_model", {"model": result.name, "model_code": result.model_code}
    if isinstance(result, datetime):
        return "datetime", result.isoformat()
    if isinstance(result, (bytes, bytearray)):
        return "raw", bytes(result).hex().upper()
    if isinstance(result, float):
        return "float", result
    if isinstance(result, (BasalProfile, TempBasalPair)):
        value = result.model_dump(mode="json", exclude={"raw_data"})
        value["raw_hex"] = result.raw_data.hex().upper()
        return type(result).__name__, value
    if isinstance(result, dict):
        return "settings", {key: setting.model_dump(mode="json") for key, setting in result.items()}
    if isinstance(result, BaseModel):
        return type(result).__name__, result.model_dump(mode="json")
    return type(result).__name__, result


def _model_info(device_type: PumpDeviceType) -> PumpModelInfo:
    return PumpModelInfo(
        model=device_type.name,
        model_code=device_type.model_code,
        bolus_strokes=device_type.bolus_strokes,
        is_523_or_higher=device_type.is_523_or_higher,
    )


@api_router_decode.post("/decode", response_model=DecodeResponse)
def decode(request: DecodeRequest):
    """Decodes a raw pump response for the given command."""
    try:
        command_type = PumpCommandType.from_name(request.command)
    except KeyError:
        raise HTTPException(status_code=400, detail=f"Unknown command: {request.command}")

    try:
        result = app_state.decode_response(command_type, request.payload())
    except UnsupportedCommandError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PumpDecodeError as e:
        logger.warning(f"Failed to decode {command_type.name} response: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    result_type, value = serialize_result(result)
    return DecodeResponse(command=command_type.name, result_type=result_type, result=value)


@api_router_decode.get("/pump-model", response_model=PumpModelInfo)
def get_pump_model():
    """Returns the pump model of the current session."""
    return _model_info(app_state.get_pump_model())


@api_router_decode.put("/pump-model", response_model=PumpModelInfo)
def put_pump_model(update: PumpModelUpdate):
    """Sets the pump model of the current session. Unknown codes are rejected."""
    device_type = PumpDeviceType.get_by_model_code(update.model_code)
    if device_type is PumpDeviceType.Unknown_Device:
        raise HTTPException(status_code=422, detail=f"Unknown pump model: {update.model_code}")
    app_state.set_pump_model(device_type)
    return _model_info(app_state.get_pump_model())


@api_router_decode.get("/healthz")
def healthz():
    """Liveness probe."""
    return {"status": "ok", "pump_model": app_state.get_pump_model().name}


@api_router_decode.get("/metrics")
def metrics():
    """Prometheus metrics endpoint."""
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
