# test/devices/test_device_base.py
"""设备基类测试：电源、锁和配置更新协议"""
import pytest

from smarthome.devices import SmartLight, SmartThermostat, new_device
from smarthome.devices.garden import SprinklerSettings
from smarthome.devices.lighting import LightSettings
from smarthome.devices.settings import DeviceSettings, normalize_setting_name
from smarthome.exceptions import (
    AlreadyInStateError,
    StateError,
    UnsupportedSettingError,
    ValidationError,
)
from smarthome.models import DeviceEventType, DeviceVariant, LightColor


class TestDeviceIdentity:
    """设备身份信息测试"""

    def test_defaults(self, light):
        """测试新设备默认状态"""
        assert light.device_id == "LIGHT-001"
        assert light.serial_number == "SN-12345"
        assert light.powered is False
        assert light.locked is False

    def test_name_defaults_to_id(self):
        """测试名称缺省时使用设备ID"""
        device = SmartLight("LIGHT-009", "SN-9")

        assert device.name == "LIGHT-009"
        assert device.description == ""
        assert device.location == ""

    def test_empty_identifiers_rejected(self):
        """测试空设备ID或序列号"""
        with pytest.raises(ValidationError):
            SmartLight("", "SN-1")
        with pytest.raises(ValidationError):
            SmartLight("LIGHT-1", "   ")

    def test_identity_is_read_only(self, light):
        """测试设备ID不可修改"""
        with pytest.raises(AttributeError):
            light.device_id = "OTHER"

    def test_summary(self, light):
        """测试摘要格式"""
        summary = light.summary()

        assert summary.variant == DeviceVariant.LIGHT
        assert summary.describe() == (
            "- Living Room Light (Smart LED Light) in Living Room "
            "(ID: LIGHT-001, SN: SN-12345) (OFF)"
        )
        assert summary.describe(include_description=False) == (
            "- Living Room Light (ID: LIGHT-001, SN: SN-12345) (OFF)"
        )


class TestPowerLifecycle:
    """电源生命周期测试"""

    def test_turn_on_and_off(self, light):
        """测试开关机"""
        event = light.turn_on()

        assert light.powered is True
        assert event.event_type == DeviceEventType.POWER
        assert event.message == "Living Room Light in Living Room is now ON. (Device ID: LIGHT-001)"

        light.turn_off()
        assert light.powered is False

    def test_double_turn_on(self, light):
        """测试重复开机"""
        light.turn_on()

        with pytest.raises(AlreadyInStateError, match="already ON"):
            light.turn_on()
        assert light.powered is True

    def test_double_turn_off(self, light):
        """测试重复关机"""
        with pytest.raises(AlreadyInStateError, match="already OFF"):
            light.turn_off()

    def test_already_in_state_is_state_error(self, light):
        """测试异常层级"""
        with pytest.raises(StateError):
            light.turn_off()

    def test_power_does_not_touch_lock(self, door):
        """测试电源与锁状态互不影响"""
        assert door.locked is True

        door.turn_on()
        door.turn_off()

        assert door.locked is True


class TestUpdateConfiguration:
    """配置更新协议测试"""

    def test_update_returns_event(self, light):
        """测试配置事件"""
        event = light.update_configuration("brightness", 75)

        assert light.brightness == 75
        assert event.event_type == DeviceEventType.CONFIGURATION
        assert event.attributes == {"setting": "brightness", "value": 75}
        assert event.message == "Living Room Light brightness set to 75."

    def test_setting_name_normalised(self, thermostat):
        """测试配置项名称大小写和风格"""
        thermostat.update_configuration("FanSpeed", 3)
        assert thermostat.fan_speed == 3

        thermostat.update_configuration("fan-speed", 1)
        assert thermostat.fan_speed == 1

        thermostat.update_configuration("Temperature", 18)
        assert thermostat.temperature == 18

    def test_unsupported_setting(self, light):
        """测试不支持的配置项"""
        with pytest.raises(UnsupportedSettingError) as exc_info:
            light.update_configuration("temperature", 20)

        assert exc_info.value.setting == "temperature"
        assert exc_info.value.variant == "light"
        assert isinstance(exc_info.value, ValidationError)

    def test_out_of_range_leaves_state(self, light):
        """测试越界值不改变状态"""
        light.update_configuration("brightness", 40)

        with pytest.raises(ValidationError, match="Brightness must be between 0 and 100."):
            light.update_configuration("brightness", 101)
        assert light.brightness == 40

    @pytest.mark.parametrize("value,accepted", [(-1, False), (0, True), (100, True), (101, False)])
    def test_brightness_bounds(self, light, value, accepted):
        """测试亮度边界"""
        if accepted:
            light.update_configuration("brightness", value)
            assert light.brightness == value
        else:
            with pytest.raises(ValidationError):
                light.update_configuration("brightness", value)
            assert light.brightness == 50

    def test_wrong_type(self, light):
        """测试类型不符"""
        with pytest.raises(ValidationError, match="expects int"):
            light.update_configuration("brightness", "75")
        with pytest.raises(ValidationError):
            light.update_configuration("brightness", True)
        assert light.brightness == 50

    def test_enum_accepts_member_and_string(self, light):
        """测试枚举配置项"""
        light.update_configuration("color", "Warm")
        assert light.color == LightColor.WARM

        light.update_configuration("color", LightColor.BLUE)
        assert light.color == LightColor.BLUE

        with pytest.raises(ValidationError, match="Invalid color option."):
            light.update_configuration("color", "Purple")
        assert light.color == LightColor.BLUE

    def test_lock_via_configuration(self, light):
        """测试通过配置项上锁"""
        event = light.update_configuration("locked", True)

        assert light.locked is True
        assert event.message == "Living Room Light is locked."

        light.update_configuration("isLocked", False)
        assert light.locked is False

    def test_power_not_a_setting(self, light):
        """测试电源状态不能通过配置修改"""
        with pytest.raises(UnsupportedSettingError):
            light.update_configuration("powered", True)
        assert light.powered is False

    def test_get_settings(self, thermostat):
        """测试读取全部配置"""
        settings = thermostat.get_settings()

        assert settings["temperature"] == 22
        assert settings["fan_speed"] == 2
        assert settings["locked"] is False


class TestObservers:
    """事件观察者测试"""

    def test_observer_receives_events(self, light, recorded_events):
        """测试观察者收到事件"""
        observer, events = recorded_events
        light.add_observer(observer)

        light.turn_on()
        light.update_configuration("brightness", 10)

        assert [e.event_type for e in events] == [
            DeviceEventType.POWER, DeviceEventType.CONFIGURATION
        ]

    def test_failing_observer_does_not_break_device(self, light):
        """测试观察者异常不影响设备"""
        def broken(event):
            raise RuntimeError("boom")

        light.add_observer(broken)
        light.turn_on()

        assert light.powered is True

    def test_remove_observer(self, light, recorded_events):
        """测试注销观察者"""
        observer, events = recorded_events
        light.add_observer(observer)
        light.remove_observer(observer)

        light.turn_on()
        assert events == []


class TestStateAndCapabilities:
    """状态快照与能力描述测试"""

    def test_get_state(self, light):
        """测试状态快照"""
        light.turn_on()
        state = light.get_state()

        assert state.state == "on"
        assert state.variant == DeviceVariant.LIGHT
        assert state.attributes["brightness"] == 50

    def test_capabilities(self):
        """测试能力描述"""
        device = new_device("light", "LIGHT-9", "SN-9")
        capability = device.get_capabilities()

        assert capability.type == DeviceVariant.LIGHT
        assert set(capability.settings) == {"locked", "brightness", "color"}
        assert capability.actions == ["turn_on", "turn_off"]

    def test_supported_settings_per_class(self):
        """测试各类型配置项互不影响"""
        assert "brightness" in SmartLight.supported_settings()
        assert "brightness" not in SmartThermostat.supported_settings()


class TestSettingHelpers:
    """配置校验工具测试"""

    @pytest.mark.parametrize("raw,expected", [
        ("Brightness", "brightness"),
        ("fanSpeed", "fan_speed"),
        ("FanSpeed", "fan_speed"),
        ("fan-speed", "fan_speed"),
        ("water tank", "water_tank"),
        ("isLocked", "is_locked"),
    ])
    def test_normalize_setting_name(self, raw, expected):
        """测试名称规范化"""
        assert normalize_setting_name(raw) == expected

    def test_normalize_rejects_blank(self):
        """测试空名称"""
        with pytest.raises(ValidationError):
            normalize_setting_name("  ")
        with pytest.raises(ValidationError):
            normalize_setting_name(42)

    def test_check_does_not_modify(self):
        """测试校验不修改当前配置"""
        settings = LightSettings()

        assert settings.check("color", "Red") == LightColor.RED
        assert settings.color == LightColor.WHITE

    def test_check_messages(self):
        """测试校验错误信息"""
        settings = LightSettings()

        with pytest.raises(ValidationError, match="requires a value"):
            settings.check("brightness", None)
        with pytest.raises(ValidationError, match="expects bool, got str"):
            settings.check("locked", "yes")
        with pytest.raises(ValidationError, match="Brightness must be between 0 and 100."):
            settings.check("brightness", -5)

    def test_base_settings(self):
        """测试所有设备共享 locked 配置项"""
        assert DeviceSettings.names() == ["locked"]
        assert DeviceSettings().locked is False
        assert "locked" in LightSettings.names()

    def test_nullable_datetime(self):
        """测试可空时间配置项只接受 datetime"""
        settings = SprinklerSettings()

        assert settings.check("custom_schedule_time", None) is None
        with pytest.raises(ValidationError, match="expects datetime"):
            settings.check("custom_schedule_time", "2030-01-01T06:30:00")
