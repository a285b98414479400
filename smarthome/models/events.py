"""设备事件模型

设备和注册表的每次状态变化都会产生一个事件，调用方可直接使用返回值，
也可以通过观察者接收
"""

import time
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field


class DeviceEventType(str, Enum):
    """事件类型枚举"""
    POWER = "power"                  # 开关机
    CONFIGURATION = "configuration"  # 配置变更
    ACTION = "action"                # 设备动作（报警、喂食、喷灌等）
    REGISTRY = "registry"            # 注册表变更（添加、移除、信息更新）


class DeviceEvent(BaseModel):
    """设备事件"""
    device_id: str = Field(..., description="设备ID")
    event_type: DeviceEventType = Field(..., description="事件类型")
    message: str = Field(..., description="可读的事件描述")
    attributes: Dict[str, Any] = Field(default_factory=dict, description="事件相关数据")
    timestamp: float = Field(default_factory=time.time, description="事件时间戳")

    def __str__(self) -> str:
        return self.message
