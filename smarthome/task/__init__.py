"""延时动作调度模块"""
from smarthome.task.models import ActionStatus, CancellationToken, ScheduledAction
from smarthome.task.queue import ActionQueue
from smarthome.task.scheduler import ActionScheduler

__all__ = [
    "ActionStatus",
    "CancellationToken",
    "ScheduledAction",
    "ActionQueue",
    "ActionScheduler",
]
