"""配置项校验

每个设备类型用一个 DeviceSettings 子类（pydantic 模型）描述自己的配置项：
期望类型、取值范围或枚举、默认值以及违反约束时的错误信息
"""

import re
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, List

from pydantic import BaseModel, ConfigDict, Field, Strict, StrictBool
from pydantic import ValidationError as PydanticValidationError

from smarthome.exceptions import ValidationError

# camelCase / PascalCase 单词边界
_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# 只接受 datetime 实例，不解析字符串或时间戳
StrictDatetime = Annotated[datetime, Strict()]

# pydantic 类型错误 -> 错误信息中的类型名
_TYPE_NAMES = {
    "int_type": "int",
    "bool_type": "bool",
    "string_type": "str",
    "datetime_type": "datetime",
}


def normalize_setting_name(setting: Any) -> str:
    """将配置项名称规范化为 snake_case

    "Brightness"、"fanSpeed"、"FanSpeed"、"fan-speed" 都会得到同一个名称

    Args:
        setting: 配置项名称（字符串或以名称为值的枚举成员）

    Returns:
        str: 规范化后的名称
    """
    if isinstance(setting, Enum):
        setting = setting.value
    if not isinstance(setting, str) or not setting.strip():
        raise ValidationError(f"Setting name must be a non-empty string, got: {setting!r}")

    name = _WORD_BOUNDARY.sub("_", setting.strip())
    return name.replace("-", "_").replace(" ", "_").lower()


def require_identifier(value: Any, label: str) -> str:
    """校验设备ID、序列号等标识符非空"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} cannot be empty.")
    return value


def format_value(value: Any) -> str:
    """将配置值格式化为事件描述中的文本"""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    return str(value)


class DeviceSettings(BaseModel):
    """设备配置项基类

    所有设备类型共享 locked 配置项。赋值时由 pydantic 校验，
    校验失败时模型保持不变

    Attributes:
        ERRORS: 范围、枚举或空值校验失败时的错误信息（按配置项）
        LABELS: 事件描述中使用的名称（按配置项）
    """
    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    ERRORS: ClassVar[Dict[str, str]] = {}
    LABELS: ClassVar[Dict[str, str]] = {}

    locked: StrictBool = Field(default=False, description="是否上锁")

    @classmethod
    def names(cls) -> List[str]:
        """获取全部配置项名称"""
        return list(cls.model_fields)

    def check(self, name: str, value: Any) -> Any:
        """校验单个配置值，不修改当前配置

        Args:
            name: 配置项名称
            value: 待校验的值

        Returns:
            Any: 校验通过的值（枚举字符串会被转换为枚举成员）

        Raises:
            ValidationError: 类型不符或违反范围/枚举约束
        """
        candidate = self.model_copy()
        try:
            setattr(candidate, name, value)
        except PydanticValidationError as e:
            raise ValidationError(self._error_message(name, value, e)) from e
        return getattr(candidate, name)

    def _error_message(self, name: str, value: Any, error: PydanticValidationError) -> str:
        if value is None:
            return f"Setting '{name}' requires a value."

        error_type = error.errors()[0]["type"]
        if error_type in _TYPE_NAMES:
            return (f"Setting '{name}' expects {_TYPE_NAMES[error_type]}, "
                    f"got {type(value).__name__}.")
        if name in self.ERRORS:
            return self.ERRORS[name]
        return f"Invalid {name}: {error.errors()[0]['msg']}."

    def label(self, name: str) -> str:
        """事件描述中使用的配置项名称"""
        return self.LABELS.get(name, name.replace("_", " "))
