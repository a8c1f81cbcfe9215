import pytest

from pump_decoder import DecodingContext, PumpDeviceType, PumpModelStore


@pytest.fixture
def model_store() -> PumpModelStore:
    """A fresh session store, starting at Unknown_Device."""
    return PumpModelStore()


@pytest.fixture
def unknown_context() -> DecodingContext:
    return DecodingContext()


@pytest.fixture
def context_512() -> DecodingContext:
    return DecodingContext(device_type=PumpDeviceType.Medtronic_512)


@pytest.fixture
def context_522() -> DecodingContext:
    return DecodingContext(device_type=PumpDeviceType.Medtronic_522)


@pytest.fixture
def context_523() -> DecodingContext:
    return DecodingContext(device_type=PumpDeviceType.Medtronic_523_Revel)


@pytest.fixture
def legacy_settings_buffer() -> bytes:
    """
    21-byte settings response exercising the conditional legacy fields.
    """
    return bytes(
        [
            5,  # auto-off timeout
            3,  # beep volume (alarm mode Normal)
            1,  # audio bolus enabled
            5,  # audio bolus step size (strokes)
            0,  # variable bolus disabled
            0x64,  # max bolus (8-bit on legacy pumps)
            0x00,
            0x50,  # max basal at 6-7 on legacy pumps
            1,  # clock mode at 8 on legacy pumps
            0,  # insulin concentration
            1,  # basal profiles enabled
            2,  # active profile B
            1,  # RF enabled
            2,  # block enabled: unrecognized value
            1,  # temp basal type percent
            50,  # temp basal percent
            0,  # paradigm link
            15,  # insulin action type
            1,  # reservoir warning type
            20,  # reservoir warning point
            0,  # keypad locked
        ]
    )


@pytest.fixture
def extended_settings_buffer() -> bytes:
    """
    25-byte settings response laid out for 523-and-higher pumps.
    """
    return bytes(
        [
            5,  # auto-off timeout
            4,  # alarm mode Silent
            0,  # audio bolus disabled
            9,  # ignored: audio bolus disabled
            1,  # variable bolus enabled
            0x00,
            0x50,  # max bolus 16-bit at 5-6
            0x00,
            0x78,  # max basal 16-bit at 7-8
            1,  # clock mode at 9, also insulin concentration
            0,  # basal profiles disabled
            0,  # ignored: basal profiles disabled
            0,  # RF
            0,  # block
            0,  # temp basal type units
            0,  # ignored: temp basal type units
            1,  # paradigm link
            3,  # insulin action curve
            0,  # reservoir warning type units
            30,  # reservoir warning point
            1,  # keypad locked
            2,  # bolus scroll step size
            1,  # capture event
            0,  # other device enable
            1,  # other device paired
        ]
    )
