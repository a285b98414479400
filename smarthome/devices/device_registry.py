"""设备注册表

管理所有设备的注册、查询、批量控制和信息更新
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Type, Union

from smarthome.devices.device_base import Device, DeviceObserver
from smarthome.devices.factory import resolve_variant
from smarthome.exceptions import DuplicateError, NotFoundError, SmartHomeError
from smarthome.models import (
    DeviceCapability,
    DeviceEvent,
    DeviceEventType,
    DeviceSummary,
    DeviceVariant,
)

VariantFilter = Union[DeviceVariant, str, Type[Device]]


@dataclass
class OperationResult:
    """批量操作中单个设备的执行结果"""
    device_id: str
    success: bool
    event: Optional[DeviceEvent] = None
    error: Optional[SmartHomeError] = None


class DeviceListing:
    """设备摘要序列

    惰性、可重复迭代：每次迭代开始时读取注册表当前内容，按注册顺序生成摘要
    """

    def __init__(
        self,
        source: Callable[[], Iterable[Device]],
        predicate: Optional[Callable[[Device], bool]] = None
    ):
        self._source = source
        self._predicate = predicate

    def __iter__(self) -> Iterator[DeviceSummary]:
        for device in list(self._source()):
            if self._predicate is None or self._predicate(device):
                yield device.summary()

    def describe(self) -> List[str]:
        """格式化为控制面板列表行"""
        return [summary.describe() for summary in self]


class DeviceRegistry:
    """设备注册表

    职责：
    - 保证设备ID唯一
    - 提供设备查询和列表
    - 按设备类型批量开关
    - 转发设备事件给订阅者
    """

    def __init__(self):
        """初始化设备注册表"""
        self._devices: Dict[str, Device] = {}  # device_id -> device，保持注册顺序
        self._observers: List[DeviceObserver] = []
        self._lock = asyncio.Lock()

        print("[DeviceRegistry] Initialized")

    def __len__(self) -> int:
        return len(self._devices)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._devices

    async def add_device(self, device: Device) -> DeviceEvent:
        """注册设备

        Args:
            device: 设备实例

        Returns:
            DeviceEvent: 注册事件

        Raises:
            DuplicateError: 设备ID已存在（注册表保持不变）
        """
        async with self._lock:
            if device.device_id in self._devices:
                print(f"[DeviceRegistry] Device {device.device_id} already registered")
                raise DuplicateError(
                    f"Device with ID {device.device_id} already exists.",
                    identifier=device.device_id
                )

            self._devices[device.device_id] = device
            device.add_observer(self._forward)
            print(f"[DeviceRegistry] Device '{device.name}' ({device.device_id}) registered")

        return self._publish(
            device,
            f"{device.name} (ID: {device.device_id}, SN: {device.serial_number}) "
            f"added to {device.location}.",
            action="added"
        )

    async def remove_device(self, device_id: str) -> Device:
        """注销设备

        已被调度任务引用的设备不会被撤销，调度器在执行时会重新查询

        Args:
            device_id: 设备ID

        Returns:
            Device: 被移除的设备

        Raises:
            NotFoundError: 设备不存在
        """
        async with self._lock:
            device = self._devices.pop(device_id, None)
            if device is None:
                raise NotFoundError(f"Device with ID {device_id} not found.", identifier=device_id)

            print(f"[DeviceRegistry] Device '{device_id}' unregistered")

        self._publish(
            device,
            f"{device.name} (ID: {device.device_id}) removed from {device.location}.",
            action="removed"
        )
        device.remove_observer(self._forward)
        return device

    async def get_by_id(self, device_id: str) -> Device:
        """获取设备实例

        Raises:
            NotFoundError: 设备不存在
        """
        async with self._lock:
            device = self._devices.get(device_id)
        if device is None:
            raise NotFoundError(f"Device with ID {device_id} not found.", identifier=device_id)
        return device

    def find(self, device_id: str) -> Optional[Device]:
        """同步查询设备，不存在返回None"""
        return self._devices.get(device_id)

    def list_all(self) -> DeviceListing:
        """列出所有设备摘要"""
        return DeviceListing(self._devices.values)

    def list_by_location(self, location: str) -> DeviceListing:
        """列出指定位置（精确匹配）的设备摘要"""
        return DeviceListing(self._devices.values, lambda device: device.location == location)

    def list_device_capabilities(self) -> List[DeviceCapability]:
        """列出所有设备的能力描述"""
        return [device.get_capabilities() for device in self._devices.values()]

    async def update_details(
        self,
        device_id: str,
        name: str,
        description: str,
        location: str
    ) -> DeviceEvent:
        """更新设备名称、描述和位置

        Raises:
            NotFoundError: 设备不存在
        """
        async with self._lock:
            device = self._devices.get(device_id)
            if device is None:
                raise NotFoundError(f"Device with ID {device_id} not found.", identifier=device_id)

            device.name = name
            device.description = description
            device.location = location

        return self._publish(
            device,
            f"{device_id} details updated to: Name={name}, Description={description}, "
            f"Location={location}.",
            action="updated",
            name=name,
            description=description,
            location=location
        )

    async def group_control_by_variant(
        self,
        variant: VariantFilter,
        turn_on: bool
    ) -> List[OperationResult]:
        """按设备类型批量开关

        单个设备失败（如已处于目标状态）只记录在该设备的结果中，不影响其余设备

        Args:
            variant: 设备类型（枚举、类型名或设备类）
            turn_on: True 开机，False 关机

        Returns:
            List[OperationResult]: 每个匹配设备的结果（按注册顺序）
        """
        matches = self._variant_matcher(variant)
        results: List[OperationResult] = []

        async with self._lock:
            targets = [device for device in self._devices.values() if matches(device)]

            for device in targets:
                try:
                    event = device.turn_on() if turn_on else device.turn_off()
                    results.append(OperationResult(device.device_id, True, event=event))
                except SmartHomeError as e:
                    print(f"[DeviceRegistry] Error: {e}")
                    results.append(OperationResult(device.device_id, False, error=e))

        print(f"[DeviceRegistry] Group control ({'on' if turn_on else 'off'}): "
              f"{sum(r.success for r in results)}/{len(results)} devices succeeded")
        return results

    @staticmethod
    def _variant_matcher(variant: VariantFilter) -> Callable[[Device], bool]:
        if isinstance(variant, type) and issubclass(variant, Device):
            return lambda device: isinstance(device, variant)
        tag = resolve_variant(variant)
        return lambda device: device.variant == tag

    # ---------- 事件订阅 ----------

    def subscribe(self, observer: DeviceObserver) -> None:
        """订阅所有已注册设备的事件以及注册表事件"""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: DeviceObserver) -> None:
        """取消订阅"""
        if observer in self._observers:
            self._observers.remove(observer)

    def _forward(self, event: DeviceEvent) -> None:
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception as e:
                print(f"[DeviceRegistry] Observer error for {event.device_id}: {e}")

    def _publish(self, device: Device, message: str, **attributes) -> DeviceEvent:
        event = DeviceEvent(
            device_id=device.device_id,
            event_type=DeviceEventType.REGISTRY,
            message=message,
            attributes=attributes
        )
        self._forward(event)
        return event
