"""智能灯与温控器"""

from typing import ClassVar, Dict

from pydantic import Field, StrictInt

from smarthome.devices.device_base import Device, setting_property
from smarthome.devices.settings import DeviceSettings
from smarthome.models import DeviceVariant, LightColor, ThermostatMode


class LightSettings(DeviceSettings):
    """智能灯配置项"""
    ERRORS: ClassVar[Dict[str, str]] = {
        "brightness": "Brightness must be between 0 and 100.",
        "color": "Invalid color option.",
    }

    brightness: StrictInt = Field(default=50, ge=0, le=100, description="亮度 0-100")
    color: LightColor = Field(default=LightColor.WHITE, description="灯光颜色")


class ThermostatSettings(DeviceSettings):
    """温控器配置项"""
    ERRORS: ClassVar[Dict[str, str]] = {
        "temperature": "Temperature must be between 16°C and 30°C.",
        "mode": "Mode must be Heat, Cool, Auto, or Off.",
        "fan_speed": "Fan speed must be between 1 and 3.",
    }

    temperature: StrictInt = Field(default=22, ge=16, le=30, description="目标温度（°C）")
    mode: ThermostatMode = Field(default=ThermostatMode.AUTO, description="运行模式")
    fan_speed: StrictInt = Field(default=2, ge=1, le=3, description="风速 1-3")


class SmartLight(Device):
    """智能灯"""

    variant = DeviceVariant.LIGHT
    SETTINGS_MODEL = LightSettings

    brightness = setting_property("brightness", "亮度 0-100")
    color = setting_property("color", "灯光颜色")


class SmartThermostat(Device):
    """智能温控器"""

    variant = DeviceVariant.THERMOSTAT
    SETTINGS_MODEL = ThermostatSettings

    temperature = setting_property("temperature", "目标温度（°C）")
    mode = setting_property("mode", "运行模式")
    fan_speed = setting_property("fan_speed", "风速 1-3")

    def _apply_setting(self, name, value):
        if name == "temperature":
            self._settings.temperature = value
            return f"{self.name} temperature set to {value}°C."
        return super()._apply_setting(name, value)
