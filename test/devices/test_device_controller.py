# test/devices/test_device_controller.py
"""设备控制器测试"""
import pytest
from unittest.mock import Mock

from smarthome.devices import DeviceController, DeviceRegistry, SmartLight
from smarthome.exceptions import NotFoundError
from smarthome.models import DeviceEventType
from smarthome.task import ActionScheduler, ActionStatus


class TestDeviceController:
    """设备控制器测试"""

    @pytest.mark.asyncio
    async def test_init(self):
        """测试初始化"""
        controller = DeviceController()

        assert isinstance(controller.registry, DeviceRegistry)
        assert controller.scheduler.registry is controller.registry
        assert controller.scheduler.is_running() is False

    @pytest.mark.asyncio
    async def test_shared_registry(self):
        """测试传入已有注册表"""
        registry = DeviceRegistry()
        controller = DeviceController(device_registry=registry)

        assert controller.registry is registry
        assert controller.scheduler.registry is registry

    @pytest.mark.asyncio
    async def test_empty_registry_receives_devices(self, light):
        """测试传入的空注册表能收到通过控制器添加的设备"""
        registry = DeviceRegistry()
        controller = DeviceController(device_registry=registry)

        await controller.add_device(light)

        assert "LIGHT-001" in registry
        assert len(registry) == 1

    @pytest.mark.asyncio
    async def test_shared_scheduler(self):
        """测试传入已有调度器"""
        registry = DeviceRegistry()
        scheduler = ActionScheduler(registry)
        controller = DeviceController(device_registry=registry, scheduler=scheduler)

        assert controller.scheduler is scheduler

    @pytest.mark.asyncio
    async def test_add_get_remove(self, light):
        """测试设备增删查"""
        controller = DeviceController()

        await controller.add_device(light)
        assert (await controller.get_device("LIGHT-001")) is light

        await controller.remove_device("LIGHT-001")
        with pytest.raises(NotFoundError):
            await controller.get_device("LIGHT-001")

    @pytest.mark.asyncio
    async def test_subscribe(self, light):
        """测试事件订阅"""
        controller = DeviceController()
        observer = Mock()
        controller.subscribe(observer)

        await controller.add_device(light)
        light.turn_on()

        assert observer.call_count == 2
        assert observer.call_args[0][0].event_type == DeviceEventType.POWER

    @pytest.mark.asyncio
    async def test_describe(self, sample_devices):
        """测试列表输出"""
        controller = DeviceController()
        for device in sample_devices:
            await controller.add_device(device)
        await controller.update_device_details(
            "LIGHT-001", "Main Light", "Bright Smart Light", "Living Room"
        )

        assert len(controller.describe_all()) == 4
        assert controller.describe_location("Living Room") == [
            "- Main Light (ID: LIGHT-001, SN: SN-12345) (OFF)",
            "- Living Room Thermostat (ID: THERM-001, SN: SN-THERM-98765) (OFF)",
        ]

    @pytest.mark.asyncio
    async def test_group_control(self, sample_devices):
        """测试批量控制"""
        controller = DeviceController()
        for device in sample_devices:
            await controller.add_device(device)
        sample_devices[0].turn_on()

        results = await controller.group_control(SmartLight, True)

        assert [r.success for r in results] == [False, True]

    @pytest.mark.asyncio
    async def test_schedule_and_shutdown(self, light):
        """测试调度动作并等待完成"""
        controller = DeviceController()
        await controller.add_device(light)
        light.turn_on()

        scheduled = await controller.schedule_device_action(
            "LIGHT-001", lambda device: device.turn_off(), 0.05
        )
        assert light.powered is True

        await controller.shutdown(wait=True)

        assert scheduled.status == ActionStatus.COMPLETED
        assert light.powered is False
        assert controller.scheduler.is_running() is False

    @pytest.mark.asyncio
    async def test_shutdown_without_wait(self, light):
        """测试不等待直接关闭"""
        controller = DeviceController()
        await controller.add_device(light)

        scheduled = await controller.schedule_device_action(
            "LIGHT-001", lambda device: device.turn_on(), 10
        )
        await controller.shutdown(wait=False)

        assert controller.scheduler.is_running() is False
        assert scheduled.status == ActionStatus.PENDING
        assert light.powered is False
