"""花园喷灌器"""

from typing import Any, ClassVar, Dict, Optional

from pydantic import Field, StrictInt

from smarthome.devices.device_base import Device, setting_property
from smarthome.devices.settings import DeviceSettings, StrictDatetime
from smarthome.exceptions import StateError
from smarthome.models import DeviceEvent, DeviceEventType, DeviceVariant, SprinklerSchedule


class SprinklerSettings(DeviceSettings):
    """喷灌器配置项"""
    ERRORS: ClassVar[Dict[str, str]] = {
        "water_flow_rate": "Water flow rate must be between 1 and 10.",
        "schedule": "Schedule must be Morning, Evening, or Custom.",
        "duration_minutes": "Duration must be between 1 and 60 minutes.",
    }
    LABELS: ClassVar[Dict[str, str]] = {"duration_minutes": "duration"}

    water_flow_rate: StrictInt = Field(default=5, ge=1, le=10, description="水流量 1-10")
    schedule: SprinklerSchedule = Field(default=SprinklerSchedule.MORNING, description="喷灌计划")
    custom_schedule_time: Optional[StrictDatetime] = Field(default=None, description="自定义喷灌时间")
    duration_minutes: StrictInt = Field(default=15, ge=1, le=60, description="喷灌时长（分钟）")


class GardenSprinkler(Device):
    """花园喷灌器

    必须先开机才能开始喷灌
    """

    variant = DeviceVariant.SPRINKLER
    SETTINGS_MODEL = SprinklerSettings
    ACTIONS = ("start_watering", "stop_watering")

    water_flow_rate = setting_property("water_flow_rate", "水流量 1-10")
    schedule = setting_property("schedule", "喷灌计划")
    custom_schedule_time = setting_property("custom_schedule_time", "自定义喷灌时间")
    duration_minutes = setting_property("duration_minutes", "喷灌时长（分钟）")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._watering = False

    @property
    def watering(self) -> bool:
        """是否正在喷灌"""
        return self._watering

    def _apply_setting(self, name, value):
        if name == "custom_schedule_time":
            self._settings.custom_schedule_time = value
            if value is None:
                return f"{self.name} custom schedule time cleared."
            return f"{self.name} custom schedule time set to {value:%H:%M}."
        if name == "duration_minutes":
            self._settings.duration_minutes = value
            return f"{self.name} duration set to {value} minutes."
        return super()._apply_setting(name, value)

    def start_watering(self) -> DeviceEvent:
        """开始喷灌

        Raises:
            StateError: 设备未开机
        """
        if not self.powered:
            raise StateError(f"{self.name} must be turned on before watering.")

        self._watering = True
        return self._emit(
            DeviceEventType.ACTION,
            f"{self.name} started watering with flow rate {self.water_flow_rate} "
            f"for {self.duration_minutes} minutes.",
            watering=True
        )

    def stop_watering(self) -> DeviceEvent:
        """停止喷灌"""
        self._watering = False
        return self._emit(DeviceEventType.ACTION, f"{self.name} stopped watering.", watering=False)

    def _extra_attributes(self) -> Dict[str, Any]:
        return {"watering": self._watering}
