"""
pump_decoder.decode

Decoders for the single-value pump responses: model, clock, battery and
remaining insulin.

Functions:
    - get_uint8 / get_uint16 / get_uint16_le: fixed-offset integer extraction
    - hex_dump: printable representation of a payload for logging
    - decode_model: resolves the pump model and records it in a PumpModelStore
    - decode_time: builds the pump clock timestamp, or None for illegal values
    - decode_battery_status: battery state and optional voltage
    - decode_remaining_insulin: reservoir content in insulin units

Notes:
    - Payloads are assumed to be already de-framed and checksum-verified.
    - A payload that ends before a required offset raises PayloadTooShortError.
"""

import logging
from datetime import datetime
from typing import Optional

from common.models import BatteryStatus, BatteryStatusType
from pump_decoder.device_type import DecodingContext, PumpDeviceType, PumpModelStore
from pump_decoder.exceptions import PayloadTooShortError

logger = logging.getLogger(__name__)

PUMP_EPOCH_YEAR = 1984

BATTERY_STATUS_CODES = {
    0: BatteryStatusType.NORMAL,
    1: BatteryStatusType.LOW,
    2: BatteryStatusType.UNKNOWN,
}


def require_length(data: bytes, required: int, what: str) -> None:
    if len(data) < required:
        raise PayloadTooShortError(what, required, len(data))


def get_uint8(data: bytes, offset: int) -> int:
    return data[offset] & 0xFF


def get_uint16(data: bytes, offset: int) -> int:
    """Big-endian unsigned 16-bit value: data[offset] is the high byte."""
    return int.from_bytes(data[offset : offset + 2], byteorder="big")


def get_uint16_le(data: bytes, offset: int) -> int:
    """Little-endian unsigned 16-bit value: data[offset] is the low byte."""
    return int.from_bytes(data[offset : offset + 2], byteorder="little")


def hex_dump(data: bytes) -> str:
    return " ".join(f"{b:02X}" for b in data)


def decode_model(raw: bytes, store: PumpModelStore) -> PumpDeviceType:
    """
    Decode a model response. Byte 0 is the code length; bytes 1-3 hold the
    ASCII model code (e.g. "523").

    A resolved model overwrites the one held by `store`; an unresolved code
    returns Unknown_Device and leaves the store untouched.
    """
    require_length(raw, 4, "PumpModel")
    raw_model = raw[1:4].decode("ascii", errors="replace")
    pump_model = PumpDeviceType.get_by_model_code(raw_model)
    logger.debug(f"PumpModel: [raw={raw_model}, resolved={pump_model.name}]")

    if pump_model is not PumpDeviceType.Unknown_Device:
        store.set_pump_model(pump_model)

    return pump_model


def decode_time(raw: bytes) -> Optional[datetime]:
    """
    Decode the pump real-time clock.

    Layout: hour, minute, second, (unused), year - 1984 in the low 6 bits,
    month, day. Returns None when the fields do not form a legal date/time.
    """
    require_length(raw, 7, "RealTimeClock")
    hours = get_uint8(raw, 0)
    minutes = get_uint8(raw, 1)
    seconds = get_uint8(raw, 2)
    year = (get_uint8(raw, 4) & 0x3F) + PUMP_EPOCH_YEAR
    month = get_uint8(raw, 5)
    day = get_uint8(raw, 6)

    try:
        return datetime(year, month, day, hours, minutes, seconds)
    except ValueError as e:
        logger.error(
            f"decode_time: Failed to parse pump time value: year={year}, month={month}, "
            f"day={day}, hours={hours}, minutes={minutes}, seconds={seconds} ({e})"
        )
        return None


def decode_battery_status(raw: bytes) -> BatteryStatus:
    """
    Decode a battery status response.

    Byte 0 is the status code. When three or more bytes are present, bytes 1-2
    carry the voltage in hundredths of a volt (big-endian).
    """
    require_length(raw, 1, "GetBatteryStatus")
    status = get_uint8(raw, 0)
    battery_status = BatteryStatus(
        status_type=BATTERY_STATUS_CODES.get(status, BatteryStatusType.UNRECOGNIZED),
        raw_status=status,
    )

    if len(raw) >= 3:
        battery_status.voltage = get_uint16(raw, 1) / 100.0

    return battery_status


def decode_remaining_insulin(raw: bytes, context: DecodingContext) -> float:
    """
    Decode the reservoir content in insulin units.

    Pumps metering 40 bolus strokes per unit report the stroke count at offset
    2; all others at offset 0.

    The quotient is returned as a Python float (double precision), so 7
    strokes at 40 strokes per unit is exactly 0.175 with no single-precision
    rounding.
    """
    strokes = context.bolus_strokes
    start_idx = 2 if strokes == 40 else 0
    require_length(raw, start_idx + 2, "GetRemainingInsulin")

    value = get_uint16(raw, start_idx) / float(strokes)
    logger.debug(f"Remaining insulin: {value}")
    return value
