"""设备工厂

按设备类型标签创建带默认配置的设备
"""

from typing import Any, Dict, Optional, Type, Union

from smarthome.devices.access import SmartDoor, SmartGate
from smarthome.devices.appliances import RobotMop, SmartPetFeeder, SmartTv
from smarthome.devices.device_base import Device
from smarthome.devices.garden import GardenSprinkler
from smarthome.devices.lighting import SmartLight, SmartThermostat
from smarthome.devices.security import AlarmSystem, SecurityCamera
from smarthome.devices.settings import normalize_setting_name
from smarthome.exceptions import ValidationError
from smarthome.models import DeviceVariant

DEVICE_CLASSES: Dict[DeviceVariant, Type[Device]] = {
    DeviceVariant.LIGHT: SmartLight,
    DeviceVariant.THERMOSTAT: SmartThermostat,
    DeviceVariant.DOOR: SmartDoor,
    DeviceVariant.GATE: SmartGate,
    DeviceVariant.CAMERA: SecurityCamera,
    DeviceVariant.ALARM: AlarmSystem,
    DeviceVariant.ROBOT_MOP: RobotMop,
    DeviceVariant.TV: SmartTv,
    DeviceVariant.PET_FEEDER: SmartPetFeeder,
    DeviceVariant.SPRINKLER: GardenSprinkler,
}

# 每个设备类型都必须有对应的实现类
_missing = set(DeviceVariant) - set(DEVICE_CLASSES)
if _missing:
    raise RuntimeError(f"No device class registered for: {sorted(v.value for v in _missing)}")


def resolve_variant(variant: Union[DeviceVariant, str]) -> DeviceVariant:
    """将字符串或枚举解析为设备类型

    Raises:
        ValidationError: 未知的设备类型
    """
    if isinstance(variant, DeviceVariant):
        return variant
    if not isinstance(variant, str) or not variant.strip():
        raise ValidationError(f"Unknown device variant: {variant!r}")
    try:
        # "RobotMop"、"robot-mop"、"robot_mop" 都指向同一类型
        return DeviceVariant(normalize_setting_name(variant))
    except ValueError:
        raise ValidationError(f"Unknown device variant: {variant}")


def new_device(
    variant: Union[DeviceVariant, str],
    device_id: str,
    serial_number: str,
    name: Optional[str] = None,
    description: str = "",
    location: str = "",
    **settings: Any
) -> Device:
    """创建设备

    Args:
        variant: 设备类型
        device_id: 设备ID
        serial_number: 序列号
        name: 设备名称
        description: 设备描述
        location: 安装位置
        **settings: 创建后立即应用的初始配置（逐项校验）

    Returns:
        Device: 已初始化的设备

    Raises:
        ValidationError: 设备ID/序列号为空、类型未知或初始配置无效
    """
    device_class = DEVICE_CLASSES[resolve_variant(variant)]
    device = device_class(
        device_id,
        serial_number,
        name=name,
        description=description,
        location=location
    )

    for setting, value in settings.items():
        device.update_configuration(setting, value)

    return device
