"""门禁类设备：智能门和智能车库门

新设备默认上锁，上锁状态下不能打开
"""

from typing import ClassVar

from pydantic import Field, StrictBool

from smarthome.devices.device_base import Device, setting_property
from smarthome.devices.settings import DeviceSettings
from smarthome.exceptions import StateError
from smarthome.models import DeviceVariant


class AccessSettings(DeviceSettings):
    """门禁设备配置项"""
    locked: StrictBool = Field(default=True, description="是否上锁")
    open: StrictBool = Field(default=False, description="是否打开")


class AccessDevice(Device):
    """门禁设备基类"""

    noun: ClassVar[str] = "door"
    SETTINGS_MODEL = AccessSettings
    SETTING_ALIASES = {"is_open": "open"}

    is_open = setting_property("open", "是否打开")

    def _apply_setting(self, name, value):
        if name == "open":
            if value and self.locked:
                raise StateError(f"Cannot open a locked {self.noun}.")
            self._settings.open = value
            return f"{self.name} is {'open' if value else 'closed'}."
        return super()._apply_setting(name, value)


class SmartDoor(AccessDevice):
    """智能门"""

    variant = DeviceVariant.DOOR
    noun = "door"


class SmartGate(AccessDevice):
    """智能车库门"""

    variant = DeviceVariant.GATE
    noun = "gate"
