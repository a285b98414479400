"""家用电器：拖地机器人、智能电视和宠物喂食器

这三类设备都有消耗性资源或附带副作用的配置项
"""

from datetime import datetime, timedelta
from typing import ClassVar, Dict, Optional

from pydantic import Field, StrictBool, StrictInt

from smarthome import config
from smarthome.devices.device_base import Device, setting_property
from smarthome.devices.settings import DeviceSettings, StrictDatetime
from smarthome.exceptions import ResourceError, ValidationError
from smarthome.models import DeviceEvent, DeviceEventType, DeviceVariant, MopMode, TvInput


def _now(reference: Optional[datetime] = None) -> datetime:
    # 与传入时间保持相同的时区类型，避免 naive/aware 比较出错
    tz = reference.tzinfo if reference is not None else None
    return datetime.now(tz)


class MopSettings(DeviceSettings):
    """拖地机器人配置项"""
    ERRORS: ClassVar[Dict[str, str]] = {
        "battery": "Battery level must be between 0 and 100.",
        "mode": "Invalid mode. Must be Standby, Cleaning, Charging, or Returning.",
        "water_tank": "Water tank level must be between 0 and 100.",
    }
    LABELS: ClassVar[Dict[str, str]] = {
        "battery": "battery level",
        "water_tank": "water tank level",
    }

    battery: StrictInt = Field(default=100, ge=0, le=100, description="电量 0-100")
    mode: MopMode = Field(default=MopMode.STANDBY, description="工作模式")
    water_tank: StrictInt = Field(default=100, ge=0, le=100, description="水箱水位 0-100")


class TvSettings(DeviceSettings):
    """智能电视配置项"""
    ERRORS: ClassVar[Dict[str, str]] = {
        "volume": "Volume must be between 0 and 100.",
        "channel": "Channel must be between 1 and 999.",
        "input": "Invalid input source.",
    }

    volume: StrictInt = Field(default=50, ge=0, le=100, description="音量 0-100")
    channel: StrictInt = Field(default=1, ge=1, le=999, description="频道 1-999")
    muted: StrictBool = Field(default=False, description="是否静音")
    input: TvInput = Field(default=TvInput.HDMI1, description="信号源")


class FeederSettings(DeviceSettings):
    """宠物喂食器配置项"""
    ERRORS: ClassVar[Dict[str, str]] = {
        "food_level": "Food level must be between 0 and 100.",
        "portion_size": "Portion size must be between 1 and 5.",
        "feeding_frequency": "Feeding frequency must be between 1 and 6 times per day.",
    }

    food_level: StrictInt = Field(default=100, ge=0, le=100, description="食物余量 0-100")
    next_feeding_time: StrictDatetime = Field(
        default_factory=lambda: _now() + timedelta(hours=config.FEEDER_INITIAL_DELAY_HOURS),
        description="下次喂食时间"
    )
    portion_size: StrictInt = Field(default=1, ge=1, le=5, description="每次份数 1-5")
    feeding_frequency: StrictInt = Field(default=2, ge=1, le=6, description="每天喂食次数 1-6")


class RobotMop(Device):
    """拖地机器人"""

    variant = DeviceVariant.ROBOT_MOP
    SETTINGS_MODEL = MopSettings
    SETTING_ALIASES = {
        "battery_level": "battery",
        "current_mode": "mode",
        "water_tank_level": "water_tank",
    }
    ACTIONS = ("start_cleaning",)

    battery = setting_property("battery", "电量 0-100")
    mode = setting_property("mode", "工作模式")
    water_tank = setting_property("water_tank", "水箱水位 0-100")

    def start_cleaning(self, cleaning_mode: str = "Standard") -> DeviceEvent:
        """开始清扫

        Args:
            cleaning_mode: 清扫方式（仅用于描述）

        Raises:
            ResourceError: 电量或水箱水位不足
        """
        if self.battery < config.MOP_MIN_BATTERY:
            raise ResourceError("Battery too low to start cleaning.")
        if self.water_tank < config.MOP_MIN_WATER_TANK:
            raise ResourceError("Water tank too low to start cleaning.")

        self._settings.mode = MopMode.CLEANING
        return self._emit(
            DeviceEventType.ACTION,
            f"{self.name} started cleaning in {cleaning_mode} mode.",
            mode=MopMode.CLEANING,
            cleaning_mode=cleaning_mode
        )


class SmartTv(Device):
    """智能电视

    调节音量会自动取消静音
    """

    variant = DeviceVariant.TV
    SETTINGS_MODEL = TvSettings
    SETTING_ALIASES = {"is_muted": "muted", "current_input": "input"}
    ACTIONS = ("play_content",)

    volume = setting_property("volume", "音量 0-100")
    channel = setting_property("channel", "频道 1-999")
    muted = setting_property("muted", "是否静音")
    current_input = setting_property("input", "信号源")

    def _apply_setting(self, name, value):
        if name == "volume":
            self._settings.volume = value
            self._settings.muted = False
            return f"{self.name} volume set to {value}."
        if name == "muted":
            self._settings.muted = value
            return f"{self.name} is {'muted' if value else 'unmuted'}."
        return super()._apply_setting(name, value)

    def play_content(self, content_name: str) -> DeviceEvent:
        """播放内容（不做校验，仅产生事件）"""
        return self._emit(
            DeviceEventType.ACTION,
            f"{self.name} is now playing {content_name} on {self.current_input.value}.",
            content=content_name
        )


class SmartPetFeeder(Device):
    """宠物喂食器"""

    variant = DeviceVariant.PET_FEEDER
    SETTINGS_MODEL = FeederSettings
    ACTIONS = ("dispense_food",)

    food_level = setting_property("food_level", "食物余量 0-100")
    next_feeding_time = setting_property("next_feeding_time", "下次喂食时间")
    portion_size = setting_property("portion_size", "每次份数 1-5")
    feeding_frequency = setting_property("feeding_frequency", "每天喂食次数 1-6")

    def _apply_setting(self, name, value):
        if name == "next_feeding_time":
            if value <= _now(value):
                raise ValidationError("Feeding time must be in the future.")
            self._settings.next_feeding_time = value
            return f"{self.name} next feeding time set to {value:%H:%M}."
        if name == "food_level":
            self._settings.food_level = value
            return f"{self.name} food level set to {value}%."
        if name == "feeding_frequency":
            self._settings.feeding_frequency = value
            return f"{self.name} will now feed {value} times per day."
        return super()._apply_setting(name, value)

    def dispense_food(self) -> DeviceEvent:
        """投放一次食物，并按喂食频率推算下次喂食时间

        Raises:
            ResourceError: 食物余量不足一次的份量
        """
        required = self.portion_size * config.FOOD_PER_PORTION
        if self.food_level < required:
            raise ResourceError("Not enough food in the container.")

        self._settings.food_level = self.food_level - required
        interval = timedelta(hours=24) / self.feeding_frequency
        self._settings.next_feeding_time = _now(self.next_feeding_time) + interval
        return self._emit(
            DeviceEventType.ACTION,
            f"{self.name} dispensed {self.portion_size} portion(s) of food.",
            food_level=self.food_level,
            next_feeding_time=self.next_feeding_time
        )
