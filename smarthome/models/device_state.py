"""设备类型、状态和能力模型

定义设备类型标签、各类型的枚举取值，以及设备状态、摘要和能力描述的数据结构
"""

import time
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field


class DeviceVariant(str, Enum):
    """设备类型枚举（封闭集合）"""
    LIGHT = "light"
    THERMOSTAT = "thermostat"
    DOOR = "door"
    GATE = "gate"
    CAMERA = "camera"
    ALARM = "alarm"
    ROBOT_MOP = "robot_mop"
    TV = "tv"
    PET_FEEDER = "pet_feeder"
    SPRINKLER = "sprinkler"


class LightColor(str, Enum):
    """灯光颜色"""
    WHITE = "White"
    WARM = "Warm"
    RED = "Red"
    GREEN = "Green"
    BLUE = "Blue"
    YELLOW = "Yellow"


class ThermostatMode(str, Enum):
    """温控器模式"""
    HEAT = "Heat"
    COOL = "Cool"
    AUTO = "Auto"
    OFF = "Off"


class AlarmMode(str, Enum):
    """报警系统布防模式"""
    OFF = "Off"
    HOME = "Home"
    AWAY = "Away"


class MopMode(str, Enum):
    """拖地机器人工作模式"""
    STANDBY = "Standby"
    CLEANING = "Cleaning"
    CHARGING = "Charging"
    RETURNING = "Returning"


class TvInput(str, Enum):
    """电视信号源"""
    HDMI1 = "HDMI1"
    HDMI2 = "HDMI2"
    AV = "AV"
    TV = "TV"
    USB = "USB"


class SprinklerSchedule(str, Enum):
    """喷灌计划"""
    MORNING = "Morning"
    EVENING = "Evening"
    CUSTOM = "Custom"


class DeviceState(BaseModel):
    """设备状态

    表示设备的电源状态和当前配置值
    """
    device_id: str = Field(..., description="设备唯一标识符")
    variant: DeviceVariant = Field(..., description="设备类型")
    state: str = Field(..., description="设备状态（on/off）")
    locked: bool = Field(default=False, description="是否上锁")
    attributes: Dict[str, Any] = Field(default_factory=dict, description="设备配置值")
    last_updated: float = Field(default_factory=time.time, description="最后更新时间戳")


class DeviceSummary(BaseModel):
    """设备摘要

    注册表列表操作返回的只读快照
    """
    device_id: str = Field(..., description="设备唯一标识符")
    serial_number: str = Field(..., description="设备序列号")
    name: str = Field(..., description="设备名称")
    description: str = Field(default="", description="设备描述")
    location: str = Field(default="", description="安装位置")
    variant: DeviceVariant = Field(..., description="设备类型")
    powered: bool = Field(..., description="是否通电")
    locked: bool = Field(default=False, description="是否上锁")

    def describe(self, include_description: bool = True) -> str:
        """格式化为控制面板的列表行

        Args:
            include_description: 是否包含描述和位置

        Returns:
            str: 列表行文本
        """
        power = "ON" if self.powered else "OFF"
        if include_description:
            return (f"- {self.name} ({self.description}) in {self.location} "
                    f"(ID: {self.device_id}, SN: {self.serial_number}) ({power})")
        return f"- {self.name} (ID: {self.device_id}, SN: {self.serial_number}) ({power})"


class DeviceCapability(BaseModel):
    """设备能力描述

    描述设备支持的配置项和动作
    """
    id: str = Field(..., description="设备ID")
    name: str = Field(..., description="设备名称")
    type: DeviceVariant = Field(..., description="设备类型")
    settings: List[str] = Field(default_factory=list, description="可配置项列表")
    actions: List[str] = Field(default_factory=list, description="支持的动作列表")
