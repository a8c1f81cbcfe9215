"""
pump_decoder.basal

Composite basal values built directly from response payloads: the basal
profile schedule and the currently running temporary basal.
"""

from datetime import time
from typing import List, Optional

from pydantic import BaseModel, Field

from pump_decoder.decode import get_uint8, get_uint16, get_uint16_le
from pump_decoder.units import decode_basal_insulin

PROFILE_NOT_SET_MARKER = 0x3F


def time_from_30min_interval(interval: int) -> time:
    """Convert a half-hour slot index (0..47) to a time of day."""
    return time(hour=(interval // 2) % 24, minute=(interval % 2) * 30)


class BasalProfileEntry(BaseModel):
    rate: float
    start_time: time
    start_slot: int


class BasalProfile(BaseModel):
    """
    Basal schedule as returned for the STD, A and B profile commands.

    The payload is a list of 3-byte records: rate in strokes (little-endian,
    40 strokes/unit) followed by the start slot in half hours. A later record
    starting at slot 0 ends the schedule.
    """

    raw_data: bytes
    entries: List[BasalProfileEntry] = Field(default_factory=list)

    @property
    def is_set(self) -> bool:
        return not (len(self.raw_data) >= 3 and self.raw_data[2] == PROFILE_NOT_SET_MARKER)

    @classmethod
    def from_raw(cls, raw: bytes) -> "BasalProfile":
        profile = cls(raw_data=bytes(raw))
        if not profile.is_set:
            return profile

        for i in range(0, len(raw) - 2, 3):
            slot = get_uint8(raw, i + 2)
            if i != 0 and slot == 0:
                break
            profile.entries.append(
                BasalProfileEntry(
                    rate=decode_basal_insulin(get_uint16_le(raw, i)),
                    start_time=time_from_30min_interval(slot),
                    start_slot=slot,
                )
            )
        return profile


class TempBasalPair(BaseModel):
    """
    Temporary basal read back from the pump.

    Byte 0 selects percent (1) or absolute rate. Percent rates are in byte 1;
    absolute rates are strokes in bytes 2-3. The duration in minutes follows
    at bytes 4-5 (byte 4 only on short payloads).
    """

    raw_data: bytes
    is_percent: bool = False
    insulin_rate: float = 0.0
    duration_minutes: Optional[int] = None

    @classmethod
    def from_raw(cls, raw: bytes) -> "TempBasalPair":
        pair = cls(raw_data=bytes(raw))
        if not raw:
            return pair

        pair.is_percent = raw[0] == 1
        if pair.is_percent:
            if len(raw) > 1:
                pair.insulin_rate = float(get_uint8(raw, 1))
        elif len(raw) >= 4:
            pair.insulin_rate = decode_basal_insulin(get_uint16(raw, 2))

        if len(raw) >= 6:
            pair.duration_minutes = get_uint16(raw, 4)
        elif len(raw) == 5:
            pair.duration_minutes = get_uint8(raw, 4)
        return pair
