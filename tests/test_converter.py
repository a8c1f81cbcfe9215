"""
Tests for the response router in `pump_decoder.converter`.

These tests cover:
- Dispatch of every supported command type to its decoder.
- The pump model decode updating the session store for later calls.
- Pass-through of SetBolus payloads and the basal value factories.
- Rejection of unsupported command types.
"""

from datetime import datetime

import pytest

from common.models import BatteryStatus, BatteryStatusType
from pump_decoder import (
    PumpCommandType,
    PumpDeviceType,
    PumpModelStore,
    PumpResponseConverter,
    UnsupportedCommandError,
)
from pump_decoder.basal import BasalProfile, TempBasalPair


@pytest.fixture
def converter(model_store) -> PumpResponseConverter:
    return PumpResponseConverter(model_store=model_store)


def test_default_converter_has_unknown_store():
    converter = PumpResponseConverter()
    assert converter.model_store.get_pump_model() is PumpDeviceType.Unknown_Device


def test_model_response_updates_store(converter, model_store):
    result = converter.convert_response(PumpCommandType.PumpModel, b"\x03523")
    assert result is PumpDeviceType.Medtronic_523_Revel
    assert model_store.get_pump_model() is PumpDeviceType.Medtronic_523_Revel


def test_unknown_model_response_keeps_store(converter, model_store):
    converter.convert_response(PumpCommandType.PumpModel, b"\x03515")
    result = converter.convert_response(PumpCommandType.PumpModel, b"\x03000")
    assert result is PumpDeviceType.Unknown_Device
    assert model_store.get_pump_model() is PumpDeviceType.Medtronic_515


def test_model_decode_changes_later_decodes(converter):
    raw = bytes([0x00, 0x64, 0x01, 0x90])
    assert converter.convert_response(PumpCommandType.GetRemainingInsulin, raw) == 10.0

    converter.convert_response(PumpCommandType.PumpModel, b"\x03754")
    assert converter.convert_response(PumpCommandType.GetRemainingInsulin, raw) == 10.0

    raw_523 = bytes([0x00, 0x64, 0x00, 0x28])
    assert converter.convert_response(PumpCommandType.GetRemainingInsulin, raw_523) == 1.0


def test_clock_response(converter):
    raw = bytes([13, 45, 30, 0x00, 34, 5, 9])
    assert converter.convert_response(PumpCommandType.RealTimeClock, raw) == datetime(
        2018, 5, 9, 13, 45, 30
    )


def test_invalid_clock_response_is_none(converter):
    raw = bytes([13, 45, 30, 0x00, 34, 13, 9])
    assert converter.convert_response(PumpCommandType.RealTimeClock, raw) is None


def test_battery_response(converter):
    result = converter.convert_response(PumpCommandType.GetBatteryStatus, bytes([0x01, 0x00, 0x7C]))
    assert isinstance(result, BatteryStatus)
    assert result.status_type is BatteryStatusType.LOW
    assert result.voltage == 1.24


@pytest.mark.parametrize(
    "command",
    [
        PumpCommandType.GetBasalProfileSTD,
        PumpCommandType.GetBasalProfileA,
        PumpCommandType.GetBasalProfileB,
    ],
)
def test_basal_profile_responses(converter, command):
    result = converter.convert_response(command, bytes([0x28, 0x00, 0x00]))
    assert isinstance(result, BasalProfile)
    assert result.entries[0].rate == 1.0


def test_temp_basal_response(converter):
    result = converter.convert_response(
        PumpCommandType.ReadTemporaryBasal, bytes([0x01, 80, 0x00, 0x00, 0x00, 0x1E])
    )
    assert isinstance(result, TempBasalPair)
    assert result.insulin_rate == 80.0


def test_basal_factories_receive_raw_bytes(mocker, model_store):
    profile_factory = mocker.Mock(return_value="profile")
    temp_factory = mocker.Mock(return_value="temp")
    converter = PumpResponseConverter(
        model_store=model_store,
        basal_profile_factory=profile_factory,
        temp_basal_factory=temp_factory,
    )

    assert converter.convert_response(PumpCommandType.GetBasalProfileA, b"\x01\x02\x03") == "profile"
    assert converter.convert_response(PumpCommandType.ReadTemporaryBasal, b"\x04\x05") == "temp"
    profile_factory.assert_called_once_with(b"\x01\x02\x03")
    temp_factory.assert_called_once_with(b"\x04\x05")


def test_set_bolus_is_passed_through(converter):
    raw = bytes([0x00, 0x28])
    assert converter.convert_response(PumpCommandType.SetBolus, raw) is raw


def test_settings_responses_use_store_generation(
    converter, extended_settings_buffer, legacy_settings_buffer
):
    unknown = converter.convert_response(PumpCommandType.Settings, extended_settings_buffer)
    assert "PCFG_BOLUS_SCROLL_STEP_SIZE" not in unknown

    converter.convert_response(PumpCommandType.PumpModel, b"\x03723")
    extended = converter.convert_response(PumpCommandType.Settings, extended_settings_buffer)
    assert extended["PCFG_BOLUS_SCROLL_STEP_SIZE"].value == "2"

    legacy = converter.convert_response(PumpCommandType.Settings_512, legacy_settings_buffer)
    assert "PCFG_MM_SRESERVOIR_WARNING_POINT" not in legacy
    assert legacy["PCFG_AUTOOFF_TIMEOUT"].value == "5"


@pytest.mark.parametrize(
    "command",
    [
        PumpCommandType.GetHistoryData,
        PumpCommandType.PumpState,
        PumpCommandType.SetTemporaryBasal,
        "NotACommand",
    ],
)
def test_unsupported_command_raises(converter, command):
    with pytest.raises(UnsupportedCommandError) as exc_info:
        converter.convert_response(command, b"\x00")
    assert exc_info.value.command_type == command


def test_store_is_shared_between_converters():
    store = PumpModelStore()
    PumpResponseConverter(model_store=store).convert_response(
        PumpCommandType.PumpModel, b"\x03554"
    )
    other = PumpResponseConverter(model_store=store)
    assert other.model_store.context().bolus_strokes == 40
