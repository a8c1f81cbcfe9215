"""
pump_decoder.command_type

Opcodes of the pump commands whose responses pass through the decoder.
"""

from enum import IntEnum


class PumpCommandType(IntEnum):
    PumpModel = 0x8D
    RealTimeClock = 0x70
    GetRemainingInsulin = 0x73
    GetBatteryStatus = 0x72
    GetBasalProfileSTD = 0x92
    GetBasalProfileA = 0x93
    GetBasalProfileB = 0x94
    ReadTemporaryBasal = 0x98
    Settings_512 = 0x91
    Settings = 0xC0
    SetBolus = 0x42

    # Known to the protocol, but not decoded here
    GetHistoryData = 0x80
    PumpState = 0x83
    SetTemporaryBasal = 0x4C

    @classmethod
    def from_name(cls, name: str) -> "PumpCommandType":
        """Look up a command by its name, raising KeyError if there is none."""
        return cls[name]


BASAL_PROFILE_COMMANDS = frozenset(
    {
        PumpCommandType.GetBasalProfileSTD,
        PumpCommandType.GetBasalProfileA,
        PumpCommandType.GetBasalProfileB,
    }
)
