"""
common.models

Shared Pydantic models for use across the pump decoder modules.

BatteryStatus:
    Battery charge state reported by the pump, with an optional voltage reading.

PumpSetting:
    One decoded configuration entry (key, display value, configuration group).
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class BatteryStatusType(str, Enum):
    """Battery charge state as reported in the first byte of a battery response."""

    NORMAL = "Normal"
    LOW = "Low"
    UNKNOWN = "Unknown"
    UNRECOGNIZED = "Unrecognized"


class PumpConfigurationGroup(str, Enum):
    """Logical group a decoded pump setting belongs to."""

    GENERAL = "General"
    SOUND = "Sound"
    BOLUS = "Bolus"
    BASAL = "Basal"
    INSULIN = "Insulin"
    OTHER = "Other"


class BatteryStatus(BaseModel):
    """
    BatteryStatus

    Attributes:
        status_type (BatteryStatusType): Decoded charge state.
        voltage (Optional[float]): Battery voltage, only present for 3+ byte responses.
        raw_status (Optional[int]): The status byte as received, kept for unrecognized codes.
    """

    status_type: BatteryStatusType = BatteryStatusType.UNRECOGNIZED
    voltage: Optional[float] = None
    raw_status: Optional[int] = None


class PumpSetting(BaseModel):
    """A single named, grouped, human-readable pump setting."""

    key: str
    value: str
    group: PumpConfigurationGroup
