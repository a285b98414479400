"""智能家居控制面板自定义异常

所有异常都是可恢复的同步错误，由直接调用方决定重试、记录或跳过
"""

from typing import Optional


class SmartHomeError(Exception):
    """所有设备、注册表与调度错误的基类"""

    pass


class ValidationError(SmartHomeError):
    """取值未通过类型、范围或枚举校验"""

    pass


class UnsupportedSettingError(ValidationError):
    """设备类型不支持该配置项"""

    def __init__(self, setting: str, variant: str):
        self.setting = setting
        self.variant = variant
        super().__init__(f"Setting '{setting}' is not supported by {variant} devices.")


class StateError(SmartHomeError):
    """操作在设备当前状态下无效"""

    pass


class AlreadyInStateError(StateError):
    """重复的电源切换（已开再开 / 已关再关）"""

    pass


class DuplicateError(SmartHomeError):
    """设备ID或传感器ID已存在"""

    def __init__(self, message: str, identifier: Optional[str] = None):
        self.identifier = identifier
        super().__init__(message)


class NotFoundError(SmartHomeError):
    """设备ID或传感器ID不存在"""

    def __init__(self, message: str, identifier: Optional[str] = None):
        self.identifier = identifier
        super().__init__(message)


class ResourceError(SmartHomeError):
    """消耗性资源（电量、水量、食物）不足"""

    pass
