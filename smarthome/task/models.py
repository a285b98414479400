"""延时动作模型定义"""
import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class ActionStatus(Enum):
    """延时动作状态枚举"""
    PENDING = "pending"      # 等待触发
    RUNNING = "running"      # 执行中
    COMPLETED = "completed"  # 已完成
    FAILED = "failed"        # 失败
    CANCELLED = "cancelled"  # 已取消


class CancellationToken:
    """取消令牌

    动作开始执行前取消有效，执行开始后取消无效
    """

    def __init__(self):
        self._cancelled = False
        self.reason = ""

    def cancel(self, reason: str = "") -> None:
        self._cancelled = True
        self.reason = reason

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@dataclass(eq=False)
class ScheduledAction:
    """延时动作

    只保存设备ID，触发时由调度器重新查询设备
    """
    device_id: str
    action: Callable[[Any], Any]  # action(device)，可返回 awaitable
    delay: float  # 延时（秒）
    fire_at: float  # 触发时间（事件循环时钟）
    action_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    sequence: int = 0  # 入队序号，触发时间相同时按入队顺序执行
    status: ActionStatus = ActionStatus.PENDING
    created_at: float = field(default_factory=lambda: datetime.now().timestamp())
    updated_at: float = field(default_factory=lambda: datetime.now().timestamp())
    history: List[Dict[str, Any]] = field(default_factory=list)  # 状态转换记录
    result: Optional[Any] = None  # 动作返回值
    error: Optional[BaseException] = None  # 动作失败原因
    token: CancellationToken = field(default_factory=CancellationToken)
    future: Optional[asyncio.Future] = field(default=None, repr=False)

    @property
    def name(self) -> str:
        """动作名称（用于日志）"""
        return getattr(self.action, "__name__", repr(self.action))

    def transition_to(self, new_status: ActionStatus, reason: str = "") -> None:
        """状态转换

        Args:
            new_status: 新状态
            reason: 转换原因
        """
        old_status = self.status
        self.status = new_status
        self.updated_at = datetime.now().timestamp()

        self.history.append({
            "timestamp": self.updated_at,
            "event": "status_transition",
            "old_status": old_status.value,
            "new_status": new_status.value,
            "reason": reason
        })

        print(f"[ScheduledAction:{self.action_id[:8]}] {old_status.value} -> {new_status.value} ({reason})")

    def is_terminal(self) -> bool:
        """检查是否为终态（completed/failed/cancelled）"""
        return self.status in [ActionStatus.COMPLETED, ActionStatus.FAILED, ActionStatus.CANCELLED]

    def cancel(self, reason: str = "Cancelled by caller") -> bool:
        """取消尚未开始执行的动作

        Returns:
            bool: 是否成功取消
        """
        if self.status != ActionStatus.PENDING:
            return False

        self.token.cancel(reason)
        self.transition_to(ActionStatus.CANCELLED, reason)
        self.resolve()
        return True

    def complete(self, result: Any = None) -> None:
        """标记执行成功"""
        self.result = result
        self.transition_to(ActionStatus.COMPLETED, "Action executed")
        self.resolve()

    def fail(self, error: BaseException, reason: str) -> None:
        """标记执行失败"""
        self.error = error
        self.result = {"error": str(error), "error_type": type(error).__name__}
        self.transition_to(ActionStatus.FAILED, reason)
        self.resolve()

    def resolve(self) -> None:
        """通知等待者动作已结束（幂等）"""
        if self.future is not None and not self.future.done():
            self.future.set_result(self)

    async def wait(self) -> "ScheduledAction":
        """等待动作结束（完成、失败或取消）

        Returns:
            ScheduledAction: 动作本身，可读取 status/result/error
        """
        if self.future is None:
            if not self.is_terminal():
                raise RuntimeError(f"Action {self.action_id[:8]} was not submitted to a scheduler")
            return self
        return await asyncio.shield(self.future)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "action_id": self.action_id,
            "device_id": self.device_id,
            "name": self.name,
            "delay": self.delay,
            "status": self.status.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "history": self.history,
            "result": self.result
        }
