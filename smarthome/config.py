# 智能家居控制面板配置
import os
from dotenv import load_dotenv

# 加载项目根目录的 .env
load_dotenv(override=True)

# 拖地机器人启动清扫的最低资源
MOP_MIN_BATTERY = 20  # 最低电量（%）
MOP_MIN_WATER_TANK = 10  # 最低水箱水位（%）

# 宠物喂食器配置
FOOD_PER_PORTION = 10  # 每份食物消耗的食物余量（%）
FEEDER_INITIAL_DELAY_HOURS = 6  # 新设备首次喂食时间（小时后）

# 演示程序配置
DEMO_TIME_SCALE = float(os.getenv("DEMO_TIME_SCALE", "1.0"))  # 演示中所有延时的缩放系数
DEMO_PRINT_EVENTS = os.getenv("DEMO_PRINT_EVENTS", "true").lower() == "true"  # 是否打印设备事件
