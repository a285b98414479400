"""安防设备：监控摄像头和报警系统"""

from typing import Any, ClassVar, Dict, List, Tuple

from pydantic import Field, StrictBool, StrictInt, StrictStr, field_validator

from smarthome.devices.device_base import Device, setting_property
from smarthome.devices.settings import DeviceSettings, require_identifier
from smarthome.exceptions import DuplicateError, NotFoundError, StateError, ValidationError
from smarthome.models import AlarmMode, DeviceEvent, DeviceEventType, DeviceVariant

PAN_LIMIT = 90
TILT_LIMIT = 45


class CameraSettings(DeviceSettings):
    """监控摄像头配置项"""
    ERRORS: ClassVar[Dict[str, str]] = {
        "quality": "Recording quality must be between 1 (Low) and 3 (High).",
        "current_view": "View cannot be empty.",
    }
    LABELS: ClassVar[Dict[str, str]] = {"current_view": "view"}

    recording: StrictBool = Field(default=False, description="是否录像")
    motion_detection: StrictBool = Field(default=True, description="是否开启移动侦测")
    quality: StrictInt = Field(default=2, ge=1, le=3, description="录像质量 1-3")
    current_view: StrictStr = Field(default="Default", description="当前视角")

    @field_validator("current_view")
    @classmethod
    def _view_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("view is blank")
        return value


class AlarmSettings(DeviceSettings):
    """报警系统配置项"""
    ERRORS: ClassVar[Dict[str, str]] = {"mode": "Alarm mode must be Off, Home, or Away."}
    LABELS: ClassVar[Dict[str, str]] = {"mode": "alarm mode"}

    mode: AlarmMode = Field(default=AlarmMode.OFF, description="布防模式")


class SecurityCamera(Device):
    """监控摄像头

    云台角度通过 pan_tilt 动作调整，不属于配置项
    """

    variant = DeviceVariant.CAMERA
    SETTINGS_MODEL = CameraSettings
    SETTING_ALIASES = {
        "is_recording": "recording",
        "motion_detection_enabled": "motion_detection",
        "recording_quality": "quality",
        "view": "current_view",
    }
    ACTIONS = ("pan_tilt",)
    QUALITY_NAMES = {1: "Low", 2: "Medium", 3: "High"}

    recording = setting_property("recording", "是否录像")
    motion_detection = setting_property("motion_detection", "是否开启移动侦测")
    quality = setting_property("quality", "录像质量 1-3")
    current_view = setting_property("current_view", "当前视角")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._pan = 0
        self._tilt = 0

    @property
    def pan(self):
        return self._pan

    @property
    def tilt(self):
        return self._tilt

    def _apply_setting(self, name, value):
        if name == "recording":
            self._settings.recording = value
            return f"{self.name} recording {'started' if value else 'stopped'}."
        if name == "motion_detection":
            self._settings.motion_detection = value
            return f"{self.name} motion detection {'enabled' if value else 'disabled'}."
        if name == "quality":
            self._settings.quality = value
            return f"{self.name} recording quality set to {self.QUALITY_NAMES[value]}."
        return super()._apply_setting(name, value)

    def pan_tilt(self, pan_angle: float, tilt_angle: float) -> DeviceEvent:
        """调整云台角度

        Args:
            pan_angle: 水平角度 [-90, 90]
            tilt_angle: 俯仰角度 [-45, 45]

        Raises:
            ValidationError: 角度不是数字或超出范围
        """
        for label, angle in (("Pan", pan_angle), ("Tilt", tilt_angle)):
            if isinstance(angle, bool) or not isinstance(angle, (int, float)):
                raise ValidationError(f"{label} angle must be a number.")

        if not -PAN_LIMIT <= pan_angle <= PAN_LIMIT:
            raise ValidationError("Pan angle must be between -90 and 90 degrees.")
        if not -TILT_LIMIT <= tilt_angle <= TILT_LIMIT:
            raise ValidationError("Tilt angle must be between -45 and 45 degrees.")

        self._pan = pan_angle
        self._tilt = tilt_angle
        return self._emit(
            DeviceEventType.ACTION,
            f"{self.name} camera panned to {pan_angle}° and tilted to {tilt_angle}°.",
            pan=pan_angle,
            tilt=tilt_angle
        )

    def _extra_attributes(self) -> Dict[str, Any]:
        return {"pan": self._pan, "tilt": self._tilt}


class AlarmSystem(Device):
    """报警系统

    alarm_triggered 只能通过 trigger_alarm / silence_alarm 修改
    """

    variant = DeviceVariant.ALARM
    SETTINGS_MODEL = AlarmSettings
    SETTING_ALIASES = {"alarm_mode": "mode"}
    ACTIONS = ("trigger_alarm", "silence_alarm", "add_sensor", "remove_sensor")

    mode = setting_property("mode", "布防模式")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._alarm_triggered = False
        self._sensors: List[str] = []

    @property
    def alarm_triggered(self) -> bool:
        return self._alarm_triggered

    @property
    def connected_sensors(self) -> Tuple[str, ...]:
        """已连接的传感器ID（按添加顺序）"""
        return tuple(self._sensors)

    def trigger_alarm(self) -> DeviceEvent:
        """触发报警

        Raises:
            StateError: 报警系统处于 Off 模式
        """
        if self.mode == AlarmMode.OFF:
            raise StateError("Cannot trigger alarm when system is off.")

        self._alarm_triggered = True
        return self._emit(
            DeviceEventType.ACTION,
            f"ALARM TRIGGERED on {self.name}! Sounding siren and notifying authorities.",
            alarm_triggered=True
        )

    def silence_alarm(self) -> DeviceEvent:
        """解除报警"""
        self._alarm_triggered = False
        return self._emit(
            DeviceEventType.ACTION,
            f"{self.name} alarm silenced.",
            alarm_triggered=False
        )

    def add_sensor(self, sensor_id: str) -> DeviceEvent:
        """连接传感器

        Raises:
            DuplicateError: 传感器已连接
        """
        require_identifier(sensor_id, "Sensor ID")
        if sensor_id in self._sensors:
            raise DuplicateError(f"Sensor {sensor_id} is already connected.", identifier=sensor_id)

        self._sensors.append(sensor_id)
        return self._emit(
            DeviceEventType.ACTION,
            f"Sensor {sensor_id} added to {self.name}.",
            sensor_id=sensor_id
        )

    def remove_sensor(self, sensor_id: str) -> DeviceEvent:
        """断开传感器

        Raises:
            NotFoundError: 传感器未连接
        """
        if sensor_id not in self._sensors:
            raise NotFoundError(
                f"Sensor {sensor_id} not found in connected sensors.", identifier=sensor_id
            )

        self._sensors.remove(sensor_id)
        return self._emit(
            DeviceEventType.ACTION,
            f"Sensor {sensor_id} removed from {self.name}.",
            sensor_id=sensor_id
        )

    def _extra_attributes(self) -> Dict[str, Any]:
        return {
            "alarm_triggered": self._alarm_triggered,
            "connected_sensors": list(self._sensors),
        }
