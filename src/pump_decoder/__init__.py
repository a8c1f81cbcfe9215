"""
pump_decoder
============

Library for decoding insulin pump command responses into typed values.

This package contains the decoding logic for the pump's response payloads:
pump model, real-time clock, battery status, remaining insulin, basal
profiles, temporary basal and the two settings layouts. Byte layouts and
stroke scaling depend on the pump generation, which is tracked per session in
a PumpModelStore.

Classes:
    - PumpResponseConverter: Routes a (command type, payload) pair to its decoder
    - PumpModelStore: Session store of the connected pump model
    - PumpDeviceType: Known pump models and their generation parameters
    - PumpCommandType: Command opcodes

Functions:
    - load_settings_layouts: Load the declarative settings layouts
    - decode_settings_512 / decode_settings: Settings decoders
"""

from .command_type import PumpCommandType
from .converter import PumpResponseConverter
from .device_type import DecodingContext, PumpDeviceType, PumpModelStore
from .exceptions import (
    PayloadTooShortError,
    PumpDecodeError,
    SettingsLayoutError,
    UnsupportedCommandError,
)
from .settings import decode_settings, decode_settings_512, load_settings_layouts

__all__ = [
    "PumpCommandType",
    "PumpResponseConverter",
    "DecodingContext",
    "PumpDeviceType",
    "PumpModelStore",
    "PayloadTooShortError",
    "PumpDecodeError",
    "SettingsLayoutError",
    "UnsupportedCommandError",
    "decode_settings",
    "decode_settings_512",
    "load_settings_layouts",
]
