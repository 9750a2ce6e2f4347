"""State records for core temperature sensors."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from ..const import CORE_MANUFACTURER_ID, VALID_CORE_TEMPERATURE
from .battery import BatteryStatus


@dataclass(slots=True)
class SensorState:
    """Latest decoded readings for a single core temperature sensor.

    ``device_id`` is assigned once when the record is created and is never
    rewritten; every other field is overwritten in place as pages arrive.
    """

    device_id: int
    event_count: int | None = None
    core_temperature: float | None = None
    skin_temperature: float | None = None
    skin_temperature_valid: bool = True
    core_reserved: float | None = None
    core_reserved_valid: bool = True
    battery_status: BatteryStatus | None = None
    hardware_version: int | None = None
    manufacturer_id: int | None = None
    hardware_model_number: int | None = None
    firmware_version: int | None = None
    device_serial_number: int | None = None
    uses_heart_rate: bool | None = None
    utc_time_required: bool | None = None
    measurement_interval: float | None = None
    data_quality: int | None = None

    def is_valid_core_temperature(self, temperature: float | None = None) -> bool:
        """Return True when ``temperature`` (or the stored reading) is plausible.

        The sensor reports zero until it has settled, so anything at or below
        ``VALID_CORE_TEMPERATURE`` is treated as not yet valid.
        """

        value = self.core_temperature if temperature is None else temperature
        return value is not None and value > VALID_CORE_TEMPERATURE

    @property
    def is_core_device(self) -> bool:
        """Return True when the manufacturer page identifies a greenTEG CORE."""

        return self.manufacturer_id == CORE_MANUFACTURER_ID

    def as_dict(self) -> dict[str, Any]:
        """Return a plain snapshot suitable for events and attributes."""

        data = asdict(self)
        battery = self.battery_status
        data["battery_status"] = battery.label if battery is not None else None
        return data


@dataclass(slots=True)
class ScanEntryState(SensorState):
    """Sensor state observed while scanning, with link quality metadata."""

    rssi: int | None = None
    threshold: int | None = None
