"""延时动作调度器实现"""
import asyncio
import inspect
import math
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional, Union

from smarthome.devices.device_registry import DeviceRegistry
from smarthome.exceptions import NotFoundError, SmartHomeError, ValidationError
from smarthome.task.models import ActionStatus, ScheduledAction
from smarthome.task.queue import ActionQueue

Delay = Union[int, float, timedelta]


def _delay_seconds(delay: Delay) -> float:
    if isinstance(delay, timedelta):
        seconds = delay.total_seconds()
    elif isinstance(delay, (int, float)) and not isinstance(delay, bool):
        seconds = float(delay)
    else:
        raise ValidationError(f"Delay must be seconds or a timedelta, got {type(delay).__name__}.")

    if not math.isfinite(seconds) or seconds < 0:
        raise ValidationError(f"Delay must be a non-negative finite duration, got {delay}.")
    return seconds


class ActionScheduler:
    """延时动作调度器

    调度时检查设备是否存在，触发时按设备ID重新查询：
    设备在等待期间被移除时，动作不会执行，结果为 NotFoundError
    """

    def __init__(self, registry: DeviceRegistry):
        """初始化调度器

        Args:
            registry: 设备注册表
        """
        self.registry = registry
        self._queue = ActionQueue()
        self._actions: Dict[str, ScheduledAction] = {}  # 所有已调度动作
        self._running_tasks: Dict[str, asyncio.Task] = {}  # 执行中的异步任务
        self._device_locks: Dict[str, asyncio.Lock] = {}  # 同一设备上的动作串行执行
        self._wakeup = asyncio.Event()

        self._running = False
        self._dispatch_task: Optional[asyncio.Task] = None

        print("[ActionScheduler] Initialized")

    def start(self) -> None:
        """启动触发循环（首次调度时自动启动）"""
        if self._running:
            print("[ActionScheduler] Already running")
            return

        self._running = True
        self._dispatch_task = asyncio.create_task(self._dispatch_loop())

        print("[ActionScheduler] Dispatcher started")

    def stop(self) -> None:
        """停止触发循环，未触发的动作保留在队列中"""
        if not self._running:
            print("[ActionScheduler] Not running")
            return

        self._running = False

        if self._dispatch_task:
            self._dispatch_task.cancel()
            self._dispatch_task = None

        print("[ActionScheduler] Dispatcher stopped")

    def is_running(self) -> bool:
        return self._running

    async def schedule_action(
        self,
        device_id: str,
        action: Callable[[Any], Any],
        delay: Delay
    ) -> ScheduledAction:
        """调度延时动作

        立即返回，不等待延时结束

        Args:
            device_id: 设备ID
            action: 动作 action(device)，可以是普通函数或协程函数
            delay: 延时（秒或 timedelta）

        Returns:
            ScheduledAction: 动作句柄

        Raises:
            NotFoundError: 设备不存在（不会入队）
            ValidationError: 延时无效或动作不可调用
        """
        if not callable(action):
            raise ValidationError("Scheduled action must be callable.")
        seconds = _delay_seconds(delay)

        try:
            device = await self.registry.get_by_id(device_id)
        except NotFoundError:
            print(f"[ActionScheduler] Device with ID {device_id} not found, nothing scheduled")
            raise

        loop = asyncio.get_running_loop()
        scheduled = ScheduledAction(
            device_id=device_id,
            action=action,
            delay=seconds,
            fire_at=loop.time() + seconds,
            future=loop.create_future()
        )
        self._queue.push(scheduled)
        self._actions[scheduled.action_id] = scheduled

        print(f"[ActionScheduler] Scheduling action for {device.name} (ID: {device_id}) "
              f"in {seconds} seconds...")

        if not self._running:
            self.start()
        self._wakeup.set()

        return scheduled

    def cancel(self, action_id: str) -> bool:
        """取消尚未开始执行的动作

        Args:
            action_id: 动作ID

        Returns:
            bool: 是否成功取消
        """
        scheduled = self._actions.get(action_id)
        if not scheduled or not scheduled.cancel():
            return False

        self._queue.discard(action_id)
        self._wakeup.set()
        print(f"[ActionScheduler] Cancelled action {action_id[:8]}")
        return True

    async def _dispatch_loop(self) -> None:
        """触发循环：等待最早的触发时间，到期后启动动作"""
        loop = asyncio.get_running_loop()
        try:
            print("[ActionScheduler] Entering dispatch loop")

            while self._running:
                self._wakeup.clear()
                next_fire = self._queue.next_fire_time()

                if next_fire is None:
                    await self._wakeup.wait()
                    continue

                timeout = next_fire - loop.time()
                if timeout > 0:
                    try:
                        # 有新动作入队时提前唤醒，重新计算最早触发时间
                        await asyncio.wait_for(self._wakeup.wait(), timeout=timeout)
                        continue
                    except asyncio.TimeoutError:
                        pass

                for scheduled in self._queue.pop_due(loop.time()):
                    self._launch(scheduled)

        except asyncio.CancelledError:
            print("[ActionScheduler] Dispatch loop cancelled")

    def _launch(self, scheduled: ScheduledAction) -> None:
        scheduled.transition_to(ActionStatus.RUNNING, "Delay elapsed")
        task = asyncio.create_task(self._execute_with_monitoring(scheduled))
        self._running_tasks[scheduled.action_id] = task

    async def _execute_with_monitoring(self, scheduled: ScheduledAction) -> None:
        """执行动作并记录结果

        Args:
            scheduled: 要执行的动作
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()

        try:
            try:
                device = await self.registry.get_by_id(scheduled.device_id)
            except NotFoundError as e:
                print(f"[ActionScheduler] Device {scheduled.device_id} no longer registered, "
                      f"action {scheduled.action_id[:8]} skipped")
                scheduled.fail(e, "Device no longer registered")
                return

            lock = self._device_locks.setdefault(scheduled.device_id, asyncio.Lock())
            async with lock:
                result = scheduled.action(device)
                if inspect.isawaitable(result):
                    result = await result

            scheduled.complete(result)
            print(f"[ActionScheduler] Action {scheduled.action_id[:8]} ({scheduled.name}) completed "
                  f"in {loop.time() - start_time:.2f}s")

        except asyncio.CancelledError:
            print(f"[ActionScheduler] Action {scheduled.action_id[:8]} was cancelled")
            scheduled.transition_to(ActionStatus.CANCELLED, "Execution cancelled")

        except SmartHomeError as e:
            print(f"[ActionScheduler] Action {scheduled.action_id[:8]} failed: {e}")
            scheduled.fail(e, f"{type(e).__name__}: {e}")

        except Exception as e:
            print(f"[ActionScheduler] Action {scheduled.action_id[:8]} failed with error: {e}")
            scheduled.fail(e, f"Execution error: {e}")

        finally:
            self._running_tasks.pop(scheduled.action_id, None)
            self._release_device_lock(scheduled.device_id)
            scheduled.resolve()

    def _release_device_lock(self, device_id: str) -> None:
        """设备没有待触发或执行中的动作时释放其设备锁"""
        lock = self._device_locks.get(device_id)
        if lock is None or lock.locked():
            return
        if any(a.device_id == device_id and not a.is_terminal() for a in self._actions.values()):
            return
        del self._device_locks[device_id]

    async def join(self) -> None:
        """等待所有待触发和执行中的动作结束

        注意：触发循环停止后调用会一直等待未触发的动作
        """
        while True:
            waiting = [a for a in self._actions.values() if not a.is_terminal()]
            if not waiting:
                return
            await asyncio.gather(*(a.wait() for a in waiting))

    def get_action(self, action_id: str) -> Optional[ScheduledAction]:
        """根据ID查询动作"""
        return self._actions.get(action_id)

    def list_actions(self) -> List[ScheduledAction]:
        """列出所有已调度动作（含已结束的）"""
        return list(self._actions.values())

    def pending_count(self) -> int:
        """获取待触发动作数量"""
        return self._queue.size()

    def running_count(self) -> int:
        """获取执行中动作数量"""
        return len(self._running_tasks)

    def remove_finished(self) -> int:
        """清理已结束的动作记录

        Returns:
            int: 清理的数量
        """
        finished_ids = [action_id for action_id, a in self._actions.items() if a.is_terminal()]
        for action_id in finished_ids:
            del self._actions[action_id]

        if finished_ids:
            print(f"[ActionScheduler] Removed {len(finished_ids)} finished actions")

        return len(finished_ids)
