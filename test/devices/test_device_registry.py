# test/devices/test_device_registry.py
"""设备注册表测试"""
import pytest

from smarthome.devices import DeviceRegistry, SmartLight, SmartThermostat
from smarthome.exceptions import AlreadyInStateError, DuplicateError, NotFoundError, ValidationError
from smarthome.models import DeviceEventType, DeviceVariant


class TestDeviceRegistry:
    """设备注册表测试"""

    @pytest.mark.asyncio
    async def test_init(self):
        """测试初始化"""
        registry = DeviceRegistry()

        assert len(registry) == 0
        assert list(registry.list_all()) == []

    @pytest.mark.asyncio
    async def test_add_device(self, light):
        """测试注册设备"""
        registry = DeviceRegistry()

        event = await registry.add_device(light)

        assert "LIGHT-001" in registry
        assert event.event_type == DeviceEventType.REGISTRY
        assert event.attributes["action"] == "added"
        assert event.message == (
            "Living Room Light (ID: LIGHT-001, SN: SN-12345) added to Living Room."
        )

    @pytest.mark.asyncio
    async def test_add_duplicate(self, light):
        """测试注册重复设备"""
        registry = DeviceRegistry()
        await registry.add_device(light)
        impostor = SmartThermostat("LIGHT-001", "SN-OTHER", name="Impostor")

        with pytest.raises(DuplicateError, match="Device with ID LIGHT-001 already exists.") as exc_info:
            await registry.add_device(impostor)

        assert exc_info.value.identifier == "LIGHT-001"
        assert len(registry) == 1
        assert (await registry.get_by_id("LIGHT-001")) is light

    @pytest.mark.asyncio
    async def test_remove_device(self, light):
        """测试注销设备"""
        registry = DeviceRegistry()
        await registry.add_device(light)

        removed = await registry.remove_device("LIGHT-001")

        assert removed is light
        assert "LIGHT-001" not in registry

        with pytest.raises(NotFoundError):
            await registry.remove_device("LIGHT-001")

    @pytest.mark.asyncio
    async def test_get_by_id(self, light):
        """测试获取设备"""
        registry = DeviceRegistry()

        with pytest.raises(NotFoundError, match="Device with ID LIGHT-001 not found."):
            await registry.get_by_id("LIGHT-001")

        await registry.add_device(light)
        assert (await registry.get_by_id("LIGHT-001")) is light
        assert registry.find("LIGHT-001") is light
        assert registry.find("missing") is None


class TestDeviceListing:
    """设备列表测试"""

    @pytest.mark.asyncio
    async def test_list_all_in_registration_order(self, sample_devices):
        """测试按注册顺序列出"""
        registry = DeviceRegistry()
        for device in sample_devices:
            await registry.add_device(device)

        ids = [summary.device_id for summary in registry.list_all()]

        assert ids == ["LIGHT-001", "DOOR-001", "THERM-001", "LIGHT-002"]

    @pytest.mark.asyncio
    async def test_listing_is_restartable(self, sample_devices):
        """测试列表可重复迭代且反映最新状态"""
        registry = DeviceRegistry()
        for device in sample_devices:
            await registry.add_device(device)

        listing = registry.list_all()
        assert len(list(listing)) == 4

        await registry.remove_device("DOOR-001")
        assert len(list(listing)) == 3

    @pytest.mark.asyncio
    async def test_list_by_location(self, sample_devices):
        """测试按位置列出"""
        registry = DeviceRegistry()
        for device in sample_devices:
            await registry.add_device(device)

        living_room = [s.device_id for s in registry.list_by_location("Living Room")]

        assert living_room == ["LIGHT-001", "THERM-001"]
        assert list(registry.list_by_location("living room")) == []
        assert list(registry.list_by_location("Attic")) == []

    @pytest.mark.asyncio
    async def test_describe(self, light):
        """测试列表行格式"""
        registry = DeviceRegistry()
        await registry.add_device(light)
        light.turn_on()

        assert registry.list_all().describe() == [
            "- Living Room Light (Smart LED Light) in Living Room (ID: LIGHT-001, SN: SN-12345) (ON)"
        ]

    @pytest.mark.asyncio
    async def test_summaries_are_snapshots(self, light):
        """测试摘要不随设备变化"""
        registry = DeviceRegistry()
        await registry.add_device(light)

        summary = next(iter(registry.list_all()))
        light.turn_on()

        assert summary.powered is False

    @pytest.mark.asyncio
    async def test_capabilities(self, sample_devices):
        """测试能力列表"""
        registry = DeviceRegistry()
        for device in sample_devices:
            await registry.add_device(device)

        capabilities = registry.list_device_capabilities()

        assert [c.id for c in capabilities] == ["LIGHT-001", "DOOR-001", "THERM-001", "LIGHT-002"]
        assert "open" in capabilities[1].settings


class TestUpdateDetails:
    """设备信息更新测试"""

    @pytest.mark.asyncio
    async def test_update_details(self, light):
        """测试更新名称、描述和位置"""
        registry = DeviceRegistry()
        await registry.add_device(light)

        event = await registry.update_details(
            "LIGHT-001", "Main Light", "Bright Smart Light", "Hallway"
        )

        assert light.name == "Main Light"
        assert light.location == "Hallway"
        assert light.device_id == "LIGHT-001"
        assert event.attributes["action"] == "updated"
        assert [s.device_id for s in registry.list_by_location("Hallway")] == ["LIGHT-001"]

    @pytest.mark.asyncio
    async def test_update_missing(self):
        """测试更新不存在的设备"""
        registry = DeviceRegistry()

        with pytest.raises(NotFoundError):
            await registry.update_details("NOPE", "a", "b", "c")


class TestGroupControl:
    """批量控制测试"""

    @pytest.mark.asyncio
    async def test_group_on_by_class(self, sample_devices):
        """测试按设备类批量开机"""
        registry = DeviceRegistry()
        for device in sample_devices:
            await registry.add_device(device)

        results = await registry.group_control_by_variant(SmartLight, True)

        assert [r.device_id for r in results] == ["LIGHT-001", "LIGHT-002"]
        assert all(r.success for r in results)
        assert registry.find("THERM-001").powered is False

    @pytest.mark.asyncio
    async def test_group_continues_after_failure(self, sample_devices):
        """测试单个设备失败不影响其余设备"""
        registry = DeviceRegistry()
        for device in sample_devices:
            await registry.add_device(device)
        registry.find("LIGHT-001").turn_on()

        results = await registry.group_control_by_variant(DeviceVariant.LIGHT, True)

        assert [r.success for r in results] == [False, True]
        assert isinstance(results[0].error, AlreadyInStateError)
        assert registry.find("LIGHT-001").powered is True
        assert registry.find("LIGHT-002").powered is True

    @pytest.mark.asyncio
    async def test_group_by_string(self, sample_devices):
        """测试按类型名批量关机"""
        registry = DeviceRegistry()
        for device in sample_devices:
            await registry.add_device(device)
        registry.find("THERM-001").turn_on()

        results = await registry.group_control_by_variant("thermostat", False)

        assert len(results) == 1 and results[0].success
        assert registry.find("THERM-001").powered is False

    @pytest.mark.asyncio
    async def test_group_no_match(self, light):
        """测试没有匹配设备"""
        registry = DeviceRegistry()
        await registry.add_device(light)

        assert await registry.group_control_by_variant(DeviceVariant.CAMERA, True) == []

    @pytest.mark.asyncio
    async def test_group_unknown_variant(self):
        """测试未知设备类型"""
        registry = DeviceRegistry()

        with pytest.raises(ValidationError):
            await registry.group_control_by_variant("toaster", True)


class TestRegistryEvents:
    """注册表事件转发测试"""

    @pytest.mark.asyncio
    async def test_subscriber_receives_device_events(self, light, recorded_events):
        """测试订阅者收到设备和注册表事件"""
        observer, events = recorded_events
        registry = DeviceRegistry()
        registry.subscribe(observer)

        await registry.add_device(light)
        light.turn_on()
        await registry.remove_device("LIGHT-001")
        light.turn_off()

        assert [e.event_type for e in events] == [
            DeviceEventType.REGISTRY, DeviceEventType.POWER, DeviceEventType.REGISTRY
        ]

    @pytest.mark.asyncio
    async def test_unsubscribe(self, light, recorded_events):
        """测试取消订阅"""
        observer, events = recorded_events
        registry = DeviceRegistry()
        registry.subscribe(observer)
        registry.unsubscribe(observer)

        await registry.add_device(light)
        assert events == []
