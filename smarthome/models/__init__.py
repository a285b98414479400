"""数据模型导出"""

from smarthome.models.device_state import (
    DeviceVariant,
    LightColor,
    ThermostatMode,
    AlarmMode,
    MopMode,
    TvInput,
    SprinklerSchedule,
    DeviceState,
    DeviceSummary,
    DeviceCapability,
)
from smarthome.models.events import DeviceEvent, DeviceEventType

__all__ = [
    "DeviceVariant",
    "LightColor",
    "ThermostatMode",
    "AlarmMode",
    "MopMode",
    "TvInput",
    "SprinklerSchedule",
    "DeviceState",
    "DeviceSummary",
    "DeviceCapability",
    "DeviceEvent",
    "DeviceEventType",
]
