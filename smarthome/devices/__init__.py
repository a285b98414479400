"""设备模型层导出"""

from smarthome.devices.device_base import Device, DeviceObserver
from smarthome.devices.settings import DeviceSettings
from smarthome.devices.lighting import SmartLight, SmartThermostat
from smarthome.devices.access import AccessDevice, SmartDoor, SmartGate
from smarthome.devices.security import SecurityCamera, AlarmSystem
from smarthome.devices.appliances import RobotMop, SmartTv, SmartPetFeeder
from smarthome.devices.garden import GardenSprinkler
from smarthome.devices.factory import DEVICE_CLASSES, new_device, resolve_variant
from smarthome.devices.device_registry import DeviceRegistry, DeviceListing, OperationResult
from smarthome.devices.device_controller import DeviceController

__all__ = [
    "Device",
    "DeviceObserver",
    "DeviceSettings",
    "SmartLight",
    "SmartThermostat",
    "AccessDevice",
    "SmartDoor",
    "SmartGate",
    "SecurityCamera",
    "AlarmSystem",
    "RobotMop",
    "SmartTv",
    "SmartPetFeeder",
    "GardenSprinkler",
    "DEVICE_CLASSES",
    "new_device",
    "resolve_variant",
    "DeviceRegistry",
    "DeviceListing",
    "OperationResult",
    "DeviceController",
]
