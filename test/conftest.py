# test/conftest.py
"""Pytest配置和共享fixtures"""
import pytest
import sys
from pathlib import Path

# 添加项目根目录到Python路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from smarthome.devices import new_device  # noqa: E402
from smarthome.models import DeviceVariant  # noqa: E402


@pytest.fixture
def light():
    """客厅灯fixture"""
    return new_device(
        DeviceVariant.LIGHT, "LIGHT-001", "SN-12345",
        name="Living Room Light", description="Smart LED Light", location="Living Room"
    )


@pytest.fixture
def door():
    """前门fixture（默认上锁）"""
    return new_device(
        DeviceVariant.DOOR, "DOOR-001", "SN-DOOR-54321",
        name="Front Door", description="Smart Lock Door", location="Porch"
    )


@pytest.fixture
def thermostat():
    """温控器fixture"""
    return new_device(
        DeviceVariant.THERMOSTAT, "THERM-001", "SN-THERM-98765",
        name="Living Room Thermostat", description="Split-type Air Conditioner",
        location="Living Room"
    )


@pytest.fixture
def sample_devices(light, door, thermostat):
    """一组不同类型的设备"""
    second_light = new_device(
        DeviceVariant.LIGHT, "LIGHT-002", "SN-67890",
        name="Bedroom Light", description="Bedside Lamp", location="Bedroom"
    )
    return [light, door, thermostat, second_light]


@pytest.fixture
def recorded_events():
    """事件收集器：返回 (observer, events)"""
    events = []
    return events.append, events
