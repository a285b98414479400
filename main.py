import asyncio
from datetime import timedelta

from smarthome import config
from smarthome.devices import (
    AlarmSystem,
    DeviceController,
    GardenSprinkler,
    SmartLight,
    SmartThermostat,
    new_device,
)
from smarthome.exceptions import SmartHomeError
from smarthome.models import DeviceEvent, DeviceVariant


def print_event(event: DeviceEvent) -> None:
    """控制台事件输出"""
    print(event.message)


def scaled(seconds: float) -> timedelta:
    """按 DEMO_TIME_SCALE 缩放演示延时"""
    return timedelta(seconds=seconds * config.DEMO_TIME_SCALE)


def build_devices():
    """创建演示设备"""
    return [
        new_device(DeviceVariant.LIGHT, "LIGHT-001", "SN-12345",
                   name="Living Room Light", description="Smart LED Light",
                   location="Living Room", brightness=50),
        new_device(DeviceVariant.DOOR, "DOOR-001", "SN-DOOR-54321",
                   name="Front Door", description="Smart Lock Door",
                   location="Porch", locked=True),
        new_device(DeviceVariant.THERMOSTAT, "THERM-001", "SN-THERM-98765",
                   name="Living Room Thermostat", description="Split-type Air Conditioner",
                   location="Living Room", temperature=22),
        new_device(DeviceVariant.GATE, "GATE-001", "SN-GATE-13579",
                   name="Garage Gate", description="Smart Gate",
                   location="Garage", locked=False),
        new_device(DeviceVariant.CAMERA, "CAM-001", "SN-CAM-13331",
                   name="Front Security Camera",
                   description="4K Outdoor Security Camera with Night Vision",
                   location="Front Door"),
        new_device(DeviceVariant.ALARM, "ALS-001", "SN-ALS-12221",
                   name="Home Alarm System",
                   description="Whole-house security with motion sensors",
                   location="Hallway"),
        new_device(DeviceVariant.ROBOT_MOP, "MOP-001", "SN-MOP-24680",
                   name="Cleaning Robot", description="Smart Mopping Robot",
                   location="Living Room"),
        new_device(DeviceVariant.TV, "TV-001", "SN-TV-11223",
                   name="Living Room TV", description='65" 4K Smart TV',
                   location="Living Room"),
        new_device(DeviceVariant.PET_FEEDER, "FEED-001", "SN-FEED-33445",
                   name="Pet Feeder", description="Automatic Pet Food Dispenser",
                   location="Kitchen"),
        new_device(DeviceVariant.SPRINKLER, "SPRINK-001", "SN-SPRINK-55667",
                   name="Garden Sprinkler", description="Smart Lawn Irrigation System",
                   location="Backyard"),
    ]


async def alarm_drill(alarm: AlarmSystem) -> None:
    """触发报警，2秒后解除"""
    alarm.trigger_alarm()
    await asyncio.sleep(2 * config.DEMO_TIME_SCALE)
    alarm.silence_alarm()


def shut_down_sprinkler(sprinkler: GardenSprinkler) -> None:
    """停止喷灌并关机"""
    sprinkler.stop_watering()
    sprinkler.turn_off()


async def main():
    """演示程序入口"""
    print("[Main] Smart Home Control Panel Initializing...")

    controller = DeviceController()
    if config.DEMO_PRINT_EVENTS:
        controller.subscribe(print_event)

    devices = {device.device_id: device for device in build_devices()}
    for device in devices.values():
        await controller.add_device(device)

    print("\n=== Initial Device Status ===")
    for line in controller.describe_all():
        print(line)

    print("\n=== Device Control ===")
    try:
        for device_id in ("LIGHT-001", "THERM-001", "DOOR-001", "CAM-001", "ALS-001",
                          "MOP-001", "TV-001", "FEED-001", "SPRINK-001"):
            devices[device_id].turn_on()
    except SmartHomeError as e:
        print(f"Error: {e}")

    print("\n=== Device Configuration ===")
    try:
        light = devices["LIGHT-001"]
        light.update_configuration("brightness", 75)
        light.update_configuration("color", "Warm")

        thermostat = devices["THERM-001"]
        thermostat.update_configuration("temperature", 20)
        thermostat.update_configuration("mode", "Auto")

        devices["DOOR-001"].update_configuration("locked", False)

        camera = devices["CAM-001"]
        camera.update_configuration("quality", 3)
        camera.pan_tilt(30, 10)

        alarm = devices["ALS-001"]
        alarm.add_sensor("MOTION-001")
        alarm.add_sensor("DOOR-001")
        alarm.update_configuration("mode", "Away")

        mop = devices["MOP-001"]
        mop.update_configuration("mode", "Cleaning")
        mop.update_configuration("water_tank", 80)

        tv = devices["TV-001"]
        tv.update_configuration("channel", 42)
        tv.update_configuration("volume", 65)
        tv.play_content("Movie Time")

        feeder = devices["FEED-001"]
        feeder.update_configuration("portion_size", 2)
        feeder.update_configuration("feeding_frequency", 3)
        feeder.dispense_food()

        sprinkler = devices["SPRINK-001"]
        sprinkler.update_configuration("water_flow_rate", 7)
        sprinkler.update_configuration("duration_minutes", 1)
        sprinkler.start_watering()
    except SmartHomeError as e:
        print(f"Error: {e}")

    print("\n=== Group Control ===")
    await controller.group_control(SmartLight, True)
    await controller.group_control(SmartThermostat, False)

    print("\n=== Device Details Update ===")
    await controller.update_device_details(
        "LIGHT-001", "Main Light", "Bright Smart Light", "Living Room"
    )

    print("\n=== Scheduled Actions ===")
    await controller.schedule_device_action("LIGHT-001", lambda d: d.turn_off(), scaled(5))
    await controller.schedule_device_action("ALS-001", alarm_drill, scaled(10))
    await controller.schedule_device_action("SPRINK-001", shut_down_sprinkler, scaled(60))

    print("\n=== Device Removal ===")
    await controller.remove_device("DOOR-001")

    print("\n=== Devices in Living Room ===")
    for line in controller.describe_location("Living Room"):
        print(line)

    print("\n=== Waiting for scheduled actions ===")
    await controller.shutdown(wait=True)

    for scheduled in controller.scheduler.list_actions():
        print(f"[Main] {scheduled.device_id}: {scheduled.name} -> {scheduled.status.value}")

    print("\n=== Final Device Status ===")
    for line in controller.describe_all():
        print(line)

    print("\n[Main] Smart Home Control Panel Demonstration Complete.")


if __name__ == "__main__":
    asyncio.run(main())
