"""智能家居控制面板

设备模型、设备注册表和延时动作调度器
"""

from smarthome.exceptions import (
    SmartHomeError,
    ValidationError,
    UnsupportedSettingError,
    StateError,
    AlreadyInStateError,
    DuplicateError,
    NotFoundError,
    ResourceError,
)
from smarthome.models import DeviceVariant, DeviceEvent, DeviceEventType, DeviceSummary
from smarthome.devices import Device, DeviceRegistry, DeviceController, new_device
from smarthome.task import ActionScheduler, ActionStatus, ScheduledAction

__version__ = "0.1.0"

__all__ = [
    "SmartHomeError",
    "ValidationError",
    "UnsupportedSettingError",
    "StateError",
    "AlreadyInStateError",
    "DuplicateError",
    "NotFoundError",
    "ResourceError",
    "DeviceVariant",
    "DeviceEvent",
    "DeviceEventType",
    "DeviceSummary",
    "Device",
    "DeviceRegistry",
    "DeviceController",
    "new_device",
    "ActionScheduler",
    "ActionStatus",
    "ScheduledAction",
    "__version__",
]
