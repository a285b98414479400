"""设备控制器

控制面板入口：组合设备注册表和延时动作调度器，提供统一的设备控制接口
"""

from typing import Any, Callable, List, Optional

from smarthome.devices.device_base import Device, DeviceObserver
from smarthome.devices.device_registry import DeviceRegistry, OperationResult, VariantFilter
from smarthome.models import DeviceEvent
from smarthome.task.models import ScheduledAction
from smarthome.task.scheduler import ActionScheduler, Delay


class DeviceController:
    """设备控制器

    负责：
    - 设备注册和注销
    - 批量控制与信息更新
    - 延时动作调度
    - 设备列表输出
    """

    def __init__(
        self,
        device_registry: Optional[DeviceRegistry] = None,
        scheduler: Optional[ActionScheduler] = None
    ):
        """初始化设备控制器

        Args:
            device_registry: 设备注册表实例，默认新建
            scheduler: 调度器实例，默认基于注册表新建
        """
        # 空注册表的 len() 为 0，不能用 or 判断
        self.registry = device_registry if device_registry is not None else DeviceRegistry()
        self.scheduler = scheduler if scheduler is not None else ActionScheduler(self.registry)

        print("[DeviceController] Initialized")

    def subscribe(self, observer: DeviceObserver) -> None:
        """订阅设备事件"""
        self.registry.subscribe(observer)

    async def add_device(self, device: Device) -> DeviceEvent:
        """添加设备"""
        return await self.registry.add_device(device)

    async def remove_device(self, device_id: str) -> Device:
        """移除设备"""
        return await self.registry.remove_device(device_id)

    async def get_device(self, device_id: str) -> Device:
        """获取设备"""
        return await self.registry.get_by_id(device_id)

    async def update_device_details(
        self,
        device_id: str,
        name: str,
        description: str,
        location: str
    ) -> DeviceEvent:
        """更新设备名称、描述和位置"""
        return await self.registry.update_details(device_id, name, description, location)

    async def group_control(self, variant: VariantFilter, turn_on: bool) -> List[OperationResult]:
        """按设备类型批量开关

        Returns:
            List[OperationResult]: 每个设备的结果
        """
        results = await self.registry.group_control_by_variant(variant, turn_on)

        for result in results:
            if not result.success:
                print(f"[DeviceController] Device {result.device_id} skipped: {result.error}")

        return results

    async def schedule_device_action(
        self,
        device_id: str,
        action: Callable[[Any], Any],
        delay: Delay
    ) -> ScheduledAction:
        """调度延时动作

        Args:
            device_id: 设备ID
            action: 动作 action(device)
            delay: 延时（秒或 timedelta）

        Returns:
            ScheduledAction: 动作句柄
        """
        return await self.scheduler.schedule_action(device_id, action, delay)

    def describe_all(self) -> List[str]:
        """所有设备的列表行"""
        return self.registry.list_all().describe()

    def describe_location(self, location: str) -> List[str]:
        """指定位置设备的列表行"""
        return [
            summary.describe(include_description=False)
            for summary in self.registry.list_by_location(location)
        ]

    async def shutdown(self, wait: bool = True) -> None:
        """关闭控制器

        Args:
            wait: 是否等待所有延时动作执行完毕
        """
        if wait:
            await self.scheduler.join()
        if self.scheduler.is_running():
            self.scheduler.stop()
