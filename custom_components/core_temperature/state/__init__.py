"""State records shared by the sensor and scanner containers."""

from .battery import BatteryStatus
from .sensor_state import ScanEntryState, SensorState

__all__ = [
    "BatteryStatus",
    "ScanEntryState",
    "SensorState",
]
