"""
pump_decoder.converter

Routes a pump response to the decoder for its command type.

The converter owns no state of its own besides the PumpModelStore it was given.
The store is read once per call, so every decoder involved in a single
conversion sees the same pump generation.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from pump_decoder.basal import BasalProfile, TempBasalPair
from pump_decoder.command_type import BASAL_PROFILE_COMMANDS, PumpCommandType
from pump_decoder.decode import (
    decode_battery_status,
    decode_model,
    decode_remaining_insulin,
    decode_time,
    hex_dump,
)
from pump_decoder.device_type import PumpModelStore
from pump_decoder.exceptions import UnsupportedCommandError
from pump_decoder.settings import (
    SettingsLayout,
    decode_settings,
    decode_settings_512,
    default_settings_layouts,
)

logger = logging.getLogger(__name__)


class PumpResponseConverter:
    """
    Converts raw pump responses into typed values.

    Args:
        model_store: Session store of the connected pump model. A fresh store
            (Unknown_Device) is created when omitted.
        settings_layouts: Layouts from load_settings_layouts(); the bundled
            layouts are used when omitted.
        basal_profile_factory: Builds the value returned for basal profile commands.
        temp_basal_factory: Builds the value returned for ReadTemporaryBasal.
    """

    def __init__(
        self,
        model_store: Optional[PumpModelStore] = None,
        settings_layouts: Optional[Mapping[str, SettingsLayout]] = None,
        basal_profile_factory: Callable[[bytes], Any] = BasalProfile.from_raw,
        temp_basal_factory: Callable[[bytes], Any] = TempBasalPair.from_raw,
    ):
        self.model_store = model_store if model_store is not None else PumpModelStore()
        self.settings_layouts = settings_layouts or default_settings_layouts()
        self.basal_profile_factory = basal_profile_factory
        self.temp_basal_factory = temp_basal_factory

    def convert_response(self, command_type: PumpCommandType, raw_content: bytes) -> Any:
        """
        Decode `raw_content` as the response to `command_type`.

        Raises:
            UnsupportedCommandError: no decoder exists for the command.
        """
        logger.debug(f"Raw response before convert ({command_type!r}): {hex_dump(raw_content)}")

        context = self.model_store.context()

        if command_type == PumpCommandType.PumpModel:
            return decode_model(raw_content, self.model_store)

        if command_type == PumpCommandType.RealTimeClock:
            return decode_time(raw_content)

        if command_type == PumpCommandType.GetRemainingInsulin:
            return decode_remaining_insulin(raw_content, context)

        if command_type == PumpCommandType.GetBatteryStatus:
            return decode_battery_status(raw_content)

        if command_type in BASAL_PROFILE_COMMANDS:
            return self.basal_profile_factory(raw_content)

        if command_type == PumpCommandType.ReadTemporaryBasal:
            return self.temp_basal_factory(raw_content)

        if command_type == PumpCommandType.Settings_512:
            return decode_settings_512(raw_content, context, self.settings_layouts)

        if command_type == PumpCommandType.Settings:
            return decode_settings(raw_content, context, self.settings_layouts)

        if command_type == PumpCommandType.SetBolus:
            return raw_content

        raise UnsupportedCommandError(command_type)
