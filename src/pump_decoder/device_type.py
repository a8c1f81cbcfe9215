"""
pump_decoder.device_type

Pump hardware generations and the store that remembers which one is connected.

The generation decides how some responses are laid out and how strokes are
scaled into insulin units. A PumpModelStore is owned by the caller (one per
pump session) and is updated whenever a model response resolves to a known
device. Decoders never read the store directly; they receive a DecodingContext
snapshot taken once per decode call.
"""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class PumpDeviceType(Enum):
    Unknown_Device = ""
    Medtronic_511 = "511"
    Medtronic_512 = "512"
    Medtronic_712 = "712"
    Medtronic_515 = "515"
    Medtronic_715 = "715"
    Medtronic_522 = "522"
    Medtronic_722 = "722"
    Medtronic_523_Revel = "523"
    Medtronic_723_Revel = "723"
    Medtronic_554_Veo = "554"
    Medtronic_754_Veo = "754"

    @property
    def model_code(self) -> str:
        return self.value

    @property
    def is_523_or_higher(self) -> bool:
        """True for generations using the extended settings layout and 40 bolus strokes/unit."""
        return self in FAMILY_523_AND_HIGHER

    @property
    def is_512_712(self) -> bool:
        return self in FAMILY_512_712

    @property
    def bolus_strokes(self) -> int:
        """Bolus strokes per insulin unit."""
        return 40 if self.is_523_or_higher else 10

    @classmethod
    def get_by_model_code(cls, model_code: str) -> "PumpDeviceType":
        """
        Resolve a model code (e.g. '523') to a device type.

        Unknown or empty codes resolve to Unknown_Device.
        """
        code = (model_code or "").strip()
        for device_type in cls:
            if device_type is not cls.Unknown_Device and device_type.value == code:
                return device_type
        return cls.Unknown_Device


FAMILY_512_712 = frozenset({PumpDeviceType.Medtronic_512, PumpDeviceType.Medtronic_712})

FAMILY_523_AND_HIGHER = frozenset(
    {
        PumpDeviceType.Medtronic_523_Revel,
        PumpDeviceType.Medtronic_723_Revel,
        PumpDeviceType.Medtronic_554_Veo,
        PumpDeviceType.Medtronic_754_Veo,
    }
)


class DecodingContext(BaseModel):
    """Immutable view of the pump generation used for one decode call."""

    model_config = ConfigDict(frozen=True)

    device_type: PumpDeviceType = PumpDeviceType.Unknown_Device

    @property
    def bolus_strokes(self) -> int:
        return self.device_type.bolus_strokes

    @property
    def is_523_or_higher(self) -> bool:
        return self.device_type.is_523_or_higher

    @property
    def is_512_712(self) -> bool:
        return self.device_type.is_512_712


class PumpModelStore:
    """
    Holds the last resolved pump model for a session.

    No locking is done here; concurrent sessions must use separate stores or
    serialize access themselves.
    """

    def __init__(self, device_type: PumpDeviceType = PumpDeviceType.Unknown_Device):
        self._device_type = device_type

    def get_pump_model(self) -> PumpDeviceType:
        return self._device_type

    def set_pump_model(self, device_type: PumpDeviceType) -> bool:
        """
        Record the connected pump model.

        Unknown_Device never replaces a resolved model. Returns True if the
        store was updated.
        """
        if device_type is PumpDeviceType.Unknown_Device:
            logger.debug(f"Ignoring unknown pump model; keeping {self._device_type.name}")
            return False
        if device_type is not self._device_type:
            logger.info(f"Pump model changed: {self._device_type.name} -> {device_type.name}")
        self._device_type = device_type
        return True

    def context(self) -> DecodingContext:
        return DecodingContext(device_type=self._device_type)
