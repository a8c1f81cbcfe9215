"""
common

This package contains shared models used across the pump decoder project.

Modules:
    - models: Defines shared Pydantic models used by both the decoder library and the daemon
"""

from .models import BatteryStatus, BatteryStatusType, PumpConfigurationGroup, PumpSetting

__all__ = ["BatteryStatus", "BatteryStatusType", "PumpConfigurationGroup", "PumpSetting"]
