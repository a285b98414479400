"""延时动作队列实现"""
import heapq
import itertools
from typing import Dict, List, Optional

from smarthome.task.models import ActionStatus, ScheduledAction


class ActionQueue:
    """延时动作队列 - 按触发时间排序

    使用最小堆实现，触发时间相同时按入队顺序排序。
    已取消的动作不立即从堆中删除，出队时跳过
    """

    def __init__(self):
        """初始化动作队列"""
        self._heap: List[tuple] = []  # (触发时间, 入队序号, action_id, action)
        self._actions: Dict[str, ScheduledAction] = {}  # action_id -> 待触发动作
        self._sequence = itertools.count()

        print("[ActionQueue] Initialized")

    def push(self, action: ScheduledAction) -> None:
        """入队动作

        Args:
            action: 要入队的动作
        """
        action.sequence = next(self._sequence)
        heapq.heappush(self._heap, (action.fire_at, action.sequence, action.action_id, action))
        self._actions[action.action_id] = action

        print(f"[ActionQueue] Enqueued action {action.action_id[:8]} "
              f"(device={action.device_id}, delay={action.delay}s)")

    def _drop_inactive_head(self) -> None:
        while self._heap and self._heap[0][3].status != ActionStatus.PENDING:
            _, _, action_id, _ = heapq.heappop(self._heap)
            self._actions.pop(action_id, None)

    def next_fire_time(self) -> Optional[float]:
        """获取最早的触发时间

        Returns:
            Optional[float]: 触发时间，队列为空返回None
        """
        self._drop_inactive_head()
        return self._heap[0][0] if self._heap else None

    def pop_due(self, now: float) -> List[ScheduledAction]:
        """取出所有已到触发时间的动作

        Args:
            now: 当前时间（事件循环时钟）

        Returns:
            List[ScheduledAction]: 按触发顺序排列的动作
        """
        due = []
        while self._heap and self._heap[0][0] <= now:
            _, _, action_id, action = heapq.heappop(self._heap)
            self._actions.pop(action_id, None)
            if action.status == ActionStatus.PENDING:
                due.append(action)
        return due

    def get_by_id(self, action_id: str) -> Optional[ScheduledAction]:
        """根据ID查询待触发动作"""
        return self._actions.get(action_id)

    def discard(self, action_id: str) -> None:
        """从索引中移除动作（堆中的条目出队时跳过）"""
        self._actions.pop(action_id, None)

    def size(self) -> int:
        """获取待触发动作数量"""
        return len([a for a in self._actions.values() if a.status == ActionStatus.PENDING])

    def list_pending(self) -> List[ScheduledAction]:
        """按触发顺序列出待触发动作"""
        pending = [a for a in self._actions.values() if a.status == ActionStatus.PENDING]
        return sorted(pending, key=lambda a: (a.fire_at, a.sequence))
