"""设备基类

定义所有设备共享的身份信息、电源生命周期、锁状态和配置更新协议
"""

import time
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, Type

from smarthome.devices.settings import (
    DeviceSettings,
    format_value,
    normalize_setting_name,
    require_identifier,
)
from smarthome.exceptions import AlreadyInStateError, UnsupportedSettingError
from smarthome.models import (
    DeviceCapability,
    DeviceEvent,
    DeviceEventType,
    DeviceState,
    DeviceSummary,
    DeviceVariant,
)

DeviceObserver = Callable[[DeviceEvent], None]


def setting_property(name: str, doc: str = "") -> property:
    """生成只读配置属性，写入只能通过 update_configuration"""
    return property(lambda self: getattr(self._settings, name), doc=doc)


class Device:
    """设备基类

    所有设备类型继承此类，通过 SETTINGS_MODEL 声明配置项，
    通过重写 _apply_setting 实现配置项的业务规则

    电源状态只能由 turn_on/turn_off 修改，锁状态只能由 "locked" 配置项修改，
    二者互不影响
    """

    variant: ClassVar[DeviceVariant]
    SETTINGS_MODEL: ClassVar[Type[DeviceSettings]] = DeviceSettings
    SETTING_ALIASES: ClassVar[Dict[str, str]] = {}
    ACTIONS: ClassVar[Tuple[str, ...]] = ()

    # 所有设备类型通用的旧版名称
    _COMMON_ALIASES: ClassVar[Dict[str, str]] = {"is_locked": "locked"}

    def __init__(
        self,
        device_id: str,
        serial_number: str,
        name: Optional[str] = None,
        description: str = "",
        location: str = ""
    ):
        """初始化设备

        Args:
            device_id: 设备唯一标识符（创建后不可修改）
            serial_number: 设备序列号（创建后不可修改）
            name: 设备名称，默认使用设备ID
            description: 设备描述
            location: 安装位置
        """
        self._device_id = require_identifier(device_id, "Device ID")
        self._serial_number = require_identifier(serial_number, "Serial number")
        self.name = name or device_id
        self.description = description
        self.location = location

        self._powered = False
        self._settings = self.SETTINGS_MODEL()
        self._observers: List[DeviceObserver] = []
        self.last_updated = time.time()

    @property
    def device_id(self) -> str:
        return self._device_id

    @property
    def serial_number(self) -> str:
        return self._serial_number

    @property
    def powered(self) -> bool:
        """是否通电"""
        return self._powered

    @property
    def is_on(self) -> bool:
        return self._powered

    @property
    def locked(self) -> bool:
        """是否上锁"""
        return self._settings.locked

    # ---------- 电源生命周期 ----------

    def turn_on(self) -> DeviceEvent:
        """开机

        Returns:
            DeviceEvent: 电源事件

        Raises:
            AlreadyInStateError: 设备已开机
        """
        if self._powered:
            raise AlreadyInStateError(f"{self.name} is already ON.")
        self._powered = True
        return self._emit(
            DeviceEventType.POWER,
            f"{self.name} in {self.location} is now ON. (Device ID: {self.device_id})",
            powered=True
        )

    def turn_off(self) -> DeviceEvent:
        """关机

        Returns:
            DeviceEvent: 电源事件

        Raises:
            AlreadyInStateError: 设备已关机
        """
        if not self._powered:
            raise AlreadyInStateError(f"{self.name} is already OFF.")
        self._powered = False
        return self._emit(
            DeviceEventType.POWER,
            f"{self.name} in {self.location} is now OFF. (Device ID: {self.device_id})",
            powered=False
        )

    # ---------- 配置更新协议 ----------

    @classmethod
    def supported_settings(cls) -> List[str]:
        """获取该设备类型支持的全部配置项名称"""
        return cls.SETTINGS_MODEL.names()

    @classmethod
    def resolve_setting(cls, setting: Any) -> str:
        """将配置项名称（含旧版名称）解析为规范名称

        Raises:
            UnsupportedSettingError: 该设备类型不支持此配置项
        """
        name = normalize_setting_name(setting)
        name = cls.SETTING_ALIASES.get(name, cls._COMMON_ALIASES.get(name, name))
        if name not in cls.supported_settings():
            raise UnsupportedSettingError(str(setting), cls.variant.value)
        return name

    def update_configuration(self, setting: Any, value: Any) -> DeviceEvent:
        """更新配置项

        先校验再写入，任何校验失败都不会改变设备状态

        Args:
            setting: 配置项名称
            value: 新值

        Returns:
            DeviceEvent: 配置变更事件

        Raises:
            UnsupportedSettingError: 不支持的配置项
            ValidationError: 类型不符或违反范围/枚举约束
            StateError: 违反设备状态规则（如打开已上锁的门）
        """
        name = self.resolve_setting(setting)
        checked = self._settings.check(name, value)

        if name == "locked":
            self._settings.locked = checked
            message = f"{self.name} is {'locked' if checked else 'unlocked'}."
        else:
            message = self._apply_setting(name, checked)

        return self._emit(DeviceEventType.CONFIGURATION, message, setting=name, value=checked)

    def _apply_setting(self, name: str, value: Any) -> str:
        """写入已校验的配置值

        子类重写此方法实现业务规则，规则不满足时必须在写入前抛出异常

        Returns:
            str: 事件描述
        """
        setattr(self._settings, name, value)
        return f"{self.name} {self._settings.label(name)} set to {format_value(value)}."

    def get_settings(self) -> Dict[str, Any]:
        """获取当前全部配置值"""
        return self._settings.model_dump()

    # ---------- 状态与描述 ----------

    def _extra_attributes(self) -> Dict[str, Any]:
        """配置项之外的只读状态（由子类提供）"""
        return {}

    def get_state(self) -> DeviceState:
        """获取设备状态快照"""
        return DeviceState(
            device_id=self.device_id,
            variant=self.variant,
            state="on" if self._powered else "off",
            locked=self.locked,
            attributes={**self._settings.model_dump(exclude={"locked"}), **self._extra_attributes()},
            last_updated=self.last_updated
        )

    def summary(self) -> DeviceSummary:
        """获取设备摘要"""
        return DeviceSummary(
            device_id=self.device_id,
            serial_number=self.serial_number,
            name=self.name,
            description=self.description,
            location=self.location,
            variant=self.variant,
            powered=self._powered,
            locked=self.locked
        )

    def get_capabilities(self) -> DeviceCapability:
        """获取设备能力描述"""
        return DeviceCapability(
            id=self.device_id,
            name=self.name,
            type=self.variant,
            settings=list(self.supported_settings()),
            actions=["turn_on", "turn_off", *self.ACTIONS]
        )

    # ---------- 事件观察者 ----------

    def add_observer(self, observer: DeviceObserver) -> None:
        """注册事件观察者"""
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: DeviceObserver) -> None:
        """注销事件观察者"""
        if observer in self._observers:
            self._observers.remove(observer)

    def _emit(self, event_type: DeviceEventType, message: str, **attributes) -> DeviceEvent:
        """生成事件并通知观察者"""
        event = DeviceEvent(
            device_id=self.device_id,
            event_type=event_type,
            message=message,
            attributes=attributes
        )
        self.last_updated = event.timestamp

        for observer in list(self._observers):
            try:
                observer(event)
            except Exception as e:
                print(f"[{self.__class__.__name__}] Observer error for {self.device_id}: {e}")

        return event

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(device_id={self.device_id!r}, "
                f"powered={self._powered}, locked={self.locked})")
