"""Sensor platform for the Core Temperature integration."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.const import (
    SIGNAL_STRENGTH_DECIBELS_MILLIWATT,
    EntityCategory,
    UnitOfTemperature,
)
from homeassistant.core import callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN
from .coordinator import CoreTemperatureCoordinator
from .state import BatteryStatus, SensorState
from .transport import ChannelMode


def _core_temperature(state: SensorState) -> float | None:
    """Return the core temperature once the sensor has settled."""

    if not state.is_valid_core_temperature():
        return None
    return state.core_temperature


def _skin_temperature(state: SensorState) -> float | None:
    """Return the skin temperature unless it was flagged invalid."""

    if not state.skin_temperature_valid:
        return None
    return state.skin_temperature


def _battery_status(state: SensorState) -> str | None:
    """Return the battery status as an enum option."""

    battery = state.battery_status
    return battery.name.lower() if battery is not None else None


@dataclass(frozen=True, kw_only=True)
class CoreTemperatureSensorEntityDescription(SensorEntityDescription):
    """Describe how a sensor reads its value from a state record."""

    value_fn: Callable[[SensorState], Any]
    exists_fn: Callable[[CoreTemperatureCoordinator], bool] = lambda _: True


SENSOR_DESCRIPTIONS: tuple[CoreTemperatureSensorEntityDescription, ...] = (
    CoreTemperatureSensorEntityDescription(
        key="core_temperature",
        translation_key="core_temperature",
        device_class=SensorDeviceClass.TEMPERATURE,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=UnitOfTemperature.CELSIUS,
        suggested_display_precision=2,
        value_fn=_core_temperature,
    ),
    CoreTemperatureSensorEntityDescription(
        key="skin_temperature",
        translation_key="skin_temperature",
        device_class=SensorDeviceClass.TEMPERATURE,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=UnitOfTemperature.CELSIUS,
        suggested_display_precision=2,
        value_fn=_skin_temperature,
    ),
    CoreTemperatureSensorEntityDescription(
        key="battery_status",
        translation_key="battery_status",
        device_class=SensorDeviceClass.ENUM,
        options=[status.name.lower() for status in BatteryStatus],
        value_fn=_battery_status,
    ),
    CoreTemperatureSensorEntityDescription(
        key="firmware_version",
        translation_key="firmware_version",
        entity_category=EntityCategory.DIAGNOSTIC,
        value_fn=lambda state: state.firmware_version,
    ),
    CoreTemperatureSensorEntityDescription(
        key="hardware_version",
        translation_key="hardware_version",
        entity_category=EntityCategory.DIAGNOSTIC,
        entity_registry_enabled_default=False,
        value_fn=lambda state: state.hardware_version,
    ),
    CoreTemperatureSensorEntityDescription(
        key="serial_number",
        translation_key="serial_number",
        entity_category=EntityCategory.DIAGNOSTIC,
        entity_registry_enabled_default=False,
        value_fn=lambda state: state.device_serial_number,
    ),
    CoreTemperatureSensorEntityDescription(
        key="rssi",
        translation_key="rssi",
        device_class=SensorDeviceClass.SIGNAL_STRENGTH,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=SIGNAL_STRENGTH_DECIBELS_MILLIWATT,
        entity_category=EntityCategory.DIAGNOSTIC,
        value_fn=lambda state: getattr(state, "rssi", None),
        exists_fn=lambda coordinator: coordinator.mode is ChannelMode.SCAN,
    ),
)


class CoreTemperatureSensorEntity(
    CoordinatorEntity[CoreTemperatureCoordinator], SensorEntity
):
    """Expose one field of a core temperature sensor."""

    entity_description: CoreTemperatureSensorEntityDescription
    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: CoreTemperatureCoordinator,
        device_id: int,
        description: CoreTemperatureSensorEntityDescription,
    ) -> None:
        """Bind ``description`` to the sensor identified by ``device_id``.

        Unique ids are scoped to the config entry owning ``coordinator``; the
        device itself is shared when several entries report it.
        """

        super().__init__(coordinator)
        self.entity_description = description
        self._device_id = device_id
        entry_id = coordinator.config_entry.entry_id
        self._attr_unique_id = f"{entry_id}-{device_id}-{description.key}"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, str(device_id))},
            name=f"Core sensor {device_id}",
        )

    @property
    def _sensor_state(self) -> SensorState | None:
        return (self.coordinator.data or {}).get(self._device_id)

    @property
    def available(self) -> bool:
        """Return True once the sensor has reported at least one page."""

        return super().available and self._sensor_state is not None

    @property
    def native_value(self) -> Any:
        """Return the latest reading for this field."""

        state = self._sensor_state
        if state is None:
            return None
        return self.entity_description.value_fn(state)


def _resolve_coordinator(hass: Any, entry: Any) -> CoreTemperatureCoordinator | None:
    """Return the coordinator stored for ``entry``, if any."""

    entry_data = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    if not entry_data:
        return None
    return entry_data.get("coordinator")


async def async_setup_entry(hass: Any, entry: Any, async_add_entities: Any) -> None:
    """Set up sensor entities, adding new ones as scanned devices appear."""

    coordinator = _resolve_coordinator(hass, entry)
    if coordinator is None:
        return

    descriptions = [
        description
        for description in SENSOR_DESCRIPTIONS
        if description.exists_fn(coordinator)
    ]
    known: set[int] = set()

    @callback
    def _async_add_new_devices() -> None:
        new_ids = [
            device_id for device_id in coordinator.data or {} if device_id not in known
        ]
        if not new_ids:
            return
        known.update(new_ids)
        async_add_entities(
            CoreTemperatureSensorEntity(coordinator, device_id, description)
            for device_id in new_ids
            for description in descriptions
        )

    _async_add_new_devices()
    entry.async_on_unload(coordinator.async_add_listener(_async_add_new_devices))
